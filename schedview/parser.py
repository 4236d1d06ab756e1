"""
Row parser (sheet rows -> EventRecord list)
===========================================

The Sheets API returns a grid of strings. The first row is the header and is
skipped without checking column names; every other row maps by position:

    [0] id  [1] name  [2] track  [3] date  [4] start time  [5] end time
    [6] location  [7] speaker  [8] description  [9] tags (comma separated)

Rows without a name are dropped silently.
"""

from __future__ import annotations
from typing import Any, List, Optional, Sequence
from .models import EventRecord, DEFAULT_TRACK, DEFAULT_LOCATION, DEFAULT_DESCRIPTION

def _cell(row: Sequence[Any], i: int) -> str:
    """Return cell `i` as a string, "" if the row is too short or the cell is empty."""
    if i >= len(row):
        return ""
    v = row[i]
    if v is None:
        return ""
    return str(v)

def _split_tags(raw: str) -> tuple:
    if not raw:
        return ()
    return tuple(t.strip() for t in raw.split(","))

def parse_row(row: Sequence[Any], index: int) -> Optional[EventRecord]:
    """Build one record, or None when the name cell is blank.

    `index` is the row's position after the header and is only used for the
    placeholder id.
    """
    name = _cell(row, 1)
    if not name.strip():
        return None
    return EventRecord(
        id=_cell(row, 0) or f"evt-{index}",
        name=name,
        track=_cell(row, 2) or DEFAULT_TRACK,
        date=_cell(row, 3),
        start_time=_cell(row, 4),
        end_time=_cell(row, 5),
        location=_cell(row, 6) or DEFAULT_LOCATION,
        speaker=_cell(row, 7),
        description=_cell(row, 8) or DEFAULT_DESCRIPTION,
        tags=_split_tags(_cell(row, 9)),
    )

def parse_rows(rows: Optional[Sequence[Sequence[Any]]]) -> List[EventRecord]:
    """Parse a header + data grid into event records."""
    if not rows or len(rows) < 2:
        return []
    events: List[EventRecord] = []
    # enumerate before filtering: dropped rows still consume an index
    for i, row in enumerate(rows[1:]):
        ev = parse_row(row or [], i)
        if ev is not None:
            events.append(ev)
    return events
