"""
Free-form date/time parsing
===========================

Sheet cells hold whatever the organisers typed ("2024-05-01", "May 1",
"9:30", "10:00 AM"). `dateutil` parses them the way a browser's `Date` would;
failures never raise out of this module.

`resolve_datetime` returns a small sum type so callers must handle both cases:

    r = resolve_datetime(ev.date, ev.start_time)
    if isinstance(r, Resolved):
        ... r.value ...
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union
from dateutil import parser as dp

# Fixed date used when only the time of day matters.
EPOCH_DATE = "1970-01-01"

@dataclass(frozen=True)
class Resolved:
    value: datetime

@dataclass(frozen=True)
class Unresolved:
    text: str

DateTimeResult = Union[Resolved, Unresolved]

def _to_local_naive(dt: datetime) -> datetime:
    # aware results (e.g. "10:00 UTC") are shifted to local wall-clock time
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt

def _parse(text: str) -> Optional[datetime]:
    if not text or not text.strip():
        return None
    try:
        return _to_local_naive(dp.parse(text))
    except (ValueError, OverflowError):
        return None

def resolve_datetime(date: str, time: str = "") -> DateTimeResult:
    """Combine a date cell and a time cell into one local datetime."""
    text = f"{date or ''} {time or ''}".strip()
    if not date:
        return Unresolved(text)
    dt = _parse(text)
    if dt is None:
        return Unresolved(text)
    return Resolved(dt)

def parse_date(date: str) -> Optional[datetime]:
    """Parse a date cell on its own; None when it is not a date."""
    return _parse(date)

def time_of_day_seconds(time: str) -> float:
    """Seconds since midnight for a time cell.

    Empty or unparsable values count as 00:00 so they sort first.
    """
    dt = _parse(f"{EPOCH_DATE} {time or '00:00'}")
    if dt is None:
        return 0.0
    return dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1e6
