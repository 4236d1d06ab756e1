"""
Schedule loading (Sheets API / local export -> EventRecord list)
================================================================

Three ways to get events:

- `fetch_schedule(config)`: read the grid from the Google Sheets `values`
  endpoint and parse it. Without a real sheet id / API key it returns a mock
  schedule built around "now" so the live banner has something to show.
- `load_rows_file(path)`: read a downloaded `.xlsx` / `.csv` export with
  pandas. Returns raw rows (header included) for `parse_rows`.
- `load_schedule_file(path)`: both steps in one call.

Transport problems surface as `ScheduleFetchError`; its message is meant to be
shown to the user as-is. There is no retry.
"""

from __future__ import annotations
import logging
import os
from datetime import date, datetime, time
from typing import Any, List, Optional
from urllib.parse import quote
import pandas as pd
import requests
from .config import SheetsConfig
from .models import EventRecord
from .parser import parse_rows

logger = logging.getLogger(__name__)

SHEETS_URL = "https://sheets.googleapis.com/v4/spreadsheets/{sheet_id}/values/{sheet_range}"
DEFAULT_ERROR = "Failed to fetch schedule data."

class ScheduleFetchError(RuntimeError):
    """The schedule could not be fetched (network error or non-OK response)."""

# ---------------- Mock data ----------------
def mock_events(now: Optional[datetime] = None) -> List[EventRecord]:
    """Four events around `now`: one just ended, one live, two upcoming."""
    now = now or datetime.now()
    ymd = now.strftime("%Y-%m-%d")
    h = now.hour
    m = f"{now.minute:02d}"
    nxt = (h + 1) % 24
    prev = 23 if h - 1 < 0 else h - 1
    return [
        EventRecord(id="evt-1", name="Opening Ceremony", track="General", date=ymd,
                    start_time=f"{prev}:00", end_time=f"{h}:00", location="Main Stage",
                    speaker="Team", description="Welcome to the Hackathon!", tags=("Welcome",)),
        EventRecord(id="evt-2", name="Live Coding Session", track="Engineering", date=ymd,
                    start_time=f"{h}:00", end_time=f"{nxt}:00", location="Room A",
                    speaker="Jane Doe", description="This event is currently happening.",
                    tags=("Code", "Live")),
        EventRecord(id="evt-3", name="Design System Workshop", track="Design", date=ymd,
                    start_time=f"{nxt}:{m}", end_time=f"{(nxt + 1) % 24}:{m}", location="Room B",
                    speaker="John Smith", description="Learn Figma basics.", tags=("UX", "UI")),
        EventRecord(id="evt-4", name="Pitching 101", track="Business", date=ymd,
                    start_time=f"{(nxt + 2) % 24}:00", end_time=f"{(nxt + 3) % 24}:00",
                    location="Room C", speaker="Alice M.", description="How to pitch to investors.",
                    tags=("Pitch",)),
    ]

# ---------------- Sheets API ----------------
def sheet_url(config: SheetsConfig) -> str:
    return SHEETS_URL.format(sheet_id=quote(config.sheet_id or "", safe=""),
                             sheet_range=quote(config.sheet_range, safe=""))

def _error_message(resp: Any) -> str:
    try:
        return resp.json()["error"]["message"] or DEFAULT_ERROR
    except (ValueError, KeyError, TypeError):
        return DEFAULT_ERROR

def fetch_schedule(config: SheetsConfig, session: Any = None,
                   now: Optional[datetime] = None) -> List[EventRecord]:
    """Fetch and parse the schedule.

    `session` is anything with a requests-style `get` (a `requests.Session`,
    or a stub in tests); the `requests` module is used when omitted.
    """
    if not config.is_configured:
        logger.warning("API key or sheet id missing. Loading mock data for demonstration.")
        return mock_events(now)

    http = session or requests
    url = sheet_url(config)
    logger.info("Fetching schedule from %s", url)
    try:
        resp = http.get(url, params={"key": config.api_key}, timeout=config.timeout)
    except requests.RequestException as e:
        logger.error("Schedule fetch failed: %s", e)
        raise ScheduleFetchError(str(e)) from e

    if not resp.ok:
        msg = _error_message(resp)
        logger.error("Schedule fetch failed (HTTP %s): %s", resp.status_code, msg)
        raise ScheduleFetchError(msg)

    try:
        data = resp.json()
    except ValueError as e:
        raise ScheduleFetchError("Invalid response from the Sheets API.") from e

    values = data.get("values") if isinstance(data, dict) else None
    if not values:
        logger.warning("No data found in the spreadsheet.")
        return []
    return parse_rows(values)

# ---------------- Local exports ----------------
def _to_str(x) -> str:
    """Render one spreadsheet cell the way it reads in the sheet."""
    if x is None: return ""
    if isinstance(x, datetime):
        if pd.isna(x): return ""
        # date-only cells come back as midnight timestamps
        if (x.hour, x.minute, x.second) == (0, 0, 0):
            return x.strftime("%Y-%m-%d")
        return x.strftime("%Y-%m-%d %H:%M")
    if isinstance(x, date):
        return x.strftime("%Y-%m-%d")
    if isinstance(x, time):
        return x.strftime("%H:%M:%S" if x.second else "%H:%M")
    if isinstance(x, float):
        if pd.isna(x): return ""
        if x.is_integer(): return str(int(x))
    return str(x).strip()

def load_rows_file(path: str) -> List[List[str]]:
    """Read a spreadsheet export into a grid of strings (header row included)."""
    ext = os.path.splitext(path)[1].lower()
    if ext == ".csv":
        df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False)
    elif ext == ".xlsx":
        # no dtype=str: date/time cells keep their types so _to_str can format them
        df = pd.read_excel(path, header=None, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file type: {ext or path} (use .csv or .xlsx)")
    return [[_to_str(v) for v in row] for row in df.astype(object).itertuples(index=False, name=None)]

def load_schedule_file(path: str) -> List[EventRecord]:
    return parse_rows(load_rows_file(path))
