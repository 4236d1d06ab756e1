"""
Data model (EventRecord, FilterCriteria)
========================================

Each data row of the schedule sheet becomes one `EventRecord`.
Records are immutable (`frozen=True`): the store never edits them, it only
selects and orders them for the current view.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_TRACK = "General"
DEFAULT_LOCATION = "TBA"
DEFAULT_DESCRIPTION = "No description available."
ALL_TRACKS = "all"

@dataclass(frozen=True)
class EventRecord:
    """One schedule entry.

    Date and time fields are kept as the free-form strings found in the sheet;
    they are only interpreted when needed (sorting, live status, calendar links).
    """
    id: str
    name: str
    track: str = DEFAULT_TRACK
    date: str = ""
    start_time: str = ""
    end_time: str = ""
    location: str = DEFAULT_LOCATION
    speaker: str = ""
    description: str = DEFAULT_DESCRIPTION
    # source order, may contain empty entries
    tags: Tuple[str, ...] = ()

    def visible_tags(self) -> Tuple[str, ...]:
        return tuple(t for t in self.tags if t)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "track": self.track,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "location": self.location,
            "speaker": self.speaker,
            "description": self.description,
            "tags": list(self.tags),
        }

@dataclass(frozen=True)
class FilterCriteria:
    """User-controlled predicate for the current view.

    A falsy `date` or `search` means "no constraint"; `track == "all"` likewise.
    """
    date: Optional[str] = None
    track: str = ALL_TRACKS
    search: str = ""
