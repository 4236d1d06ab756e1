"""
Derived sets (date tabs, track options)
=======================================

Small lookup lists computed from the full event collection. They are rebuilt
from scratch whenever the collection is replaced; nothing here is updated
incrementally.
"""

from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterable, List, Tuple
from .dsa import merge_sort
from .models import EventRecord
from .timeparse import parse_date

def _distinct(values: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for v in values:
        if v != "" and v not in seen:
            seen[v] = None
    return list(seen)

def unique_dates(events: Iterable[EventRecord]) -> List[str]:
    """Distinct non-empty dates in calendar order.

    Values that parse as dates come first, oldest first. Values that do not
    parse (e.g. "Day 2") keep their first-seen order after them.
    """
    parsed: List[Tuple[datetime, str]] = []
    unparsed: List[str] = []
    for d in _distinct(e.date for e in events):
        dt = parse_date(d)
        if dt is None:
            unparsed.append(d)
        else:
            parsed.append((dt, d))
    ordered = merge_sort(parsed, key=lambda p: p[0])
    return [d for _, d in ordered] + unparsed

def unique_tracks(events: Iterable[EventRecord]) -> List[str]:
    """Distinct non-empty tracks, sorted lexicographically."""
    return sorted(_distinct(e.track for e in events))
