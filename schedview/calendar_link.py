"""
Google Calendar links
=====================

Builds an "add to calendar" URL for one event. Nothing is sent anywhere; the
result is just a string the user can open.

Dates go in compact UTC form (YYYYMMDDTHHMMSSZ). If the start cannot be
resolved the link carries only the text fields; if only the end fails, the
start is used for both bounds.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote
from .models import EventRecord
from .timeparse import Resolved, resolve_datetime

CALENDAR_URL = "https://calendar.google.com/calendar/r/eventedit"

# same unreserved set as JavaScript's encodeURIComponent
_SAFE = "-_.!~*'()"

def _encode(value: str) -> str:
    return quote(value or "", safe=_SAFE)

def compact_utc(dt: datetime) -> str:
    # naive values are local wall-clock time
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

def _format(date: str, time: str) -> Optional[str]:
    r = resolve_datetime(date, time)
    if isinstance(r, Resolved):
        try:
            return compact_utc(r.value)
        except (ValueError, OverflowError, OSError):
            return None
    return None

def build_link(event: EventRecord) -> str:
    start = _format(event.date, event.start_time)
    end = _format(event.date, event.end_time)

    params = [f"text={_encode(event.name)}"]
    if start:
        params.append(f"dates={start}/{end or start}")
    params.append(f"details={_encode(event.description)}")
    params.append(f"location={_encode(event.location)}")
    return f"{CALENDAR_URL}?" + "&".join(params)
