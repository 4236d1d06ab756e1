"""
Configuration
=============

Where the schedule comes from. Values are read from the environment (and a
local `.env` file, if present) and can be overridden on the command line:

    SCHEDVIEW_SHEET_ID     spreadsheet id (the long string in the sheet URL)
    SCHEDVIEW_API_KEY      Google API key restricted to the Sheets API
    SCHEDVIEW_SHEET_RANGE  range to read, e.g. "Sheet1" or "Sheet1!A:J"

The sheet must be readable by "anyone with the link". If id or key are
missing (or still the placeholder values), the viewer runs on mock data.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

SHEET_ID_PLACEHOLDER = "YOUR_SHEET_ID_HERE"
API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"
DEFAULT_RANGE = "Sheet1"

@dataclass
class SheetsConfig:
    sheet_id: Optional[str] = None
    api_key: Optional[str] = None
    sheet_range: str = DEFAULT_RANGE
    # seconds, per request
    timeout: float = 20.0

    @property
    def is_configured(self) -> bool:
        if not self.sheet_id or self.sheet_id == SHEET_ID_PLACEHOLDER:
            return False
        if not self.api_key or self.api_key == API_KEY_PLACEHOLDER:
            return False
        return True

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "SheetsConfig":
        if dotenv:
            load_dotenv()
        return cls(
            sheet_id=os.getenv("SCHEDVIEW_SHEET_ID"),
            api_key=os.getenv("SCHEDVIEW_API_KEY"),
            sheet_range=os.getenv("SCHEDVIEW_SHEET_RANGE") or DEFAULT_RANGE,
        )
