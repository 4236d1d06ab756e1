"""
Schedule store
==============

The store is the single source of truth for what the viewer shows:

1) Hold the full event collection (replaced wholesale on every load)
2) Hold the current filter criteria (date, track, search)
3) Recompute the filtered + sorted view after *every* change
4) Notify subscribers synchronously, in subscription order

Changes go through `dispatch(action)`; the two actions are `SetEvents` and
`SetFilter`. Subscribers receive an immutable `ScheduleState` snapshot and get
an unsubscribe handle back from `subscribe`.

Sorting uses the start time of day only. When no date filter is active the
view can mix dates, and events from different days interleave by clock time.
"""

from __future__ import annotations
import csv
import dataclasses
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union
from .dsa import merge_sort
from .indices import unique_dates, unique_tracks
from .models import EventRecord, FilterCriteria, ALL_TRACKS
from .timeparse import time_of_day_seconds

logger = logging.getLogger(__name__)

FILTER_KEYS = ("date", "track", "search")

@dataclass(frozen=True)
class ScheduleState:
    """Read-only snapshot handed to subscribers."""
    all_events: Tuple[EventRecord, ...] = ()
    filtered_events: Tuple[EventRecord, ...] = ()
    dates: Tuple[str, ...] = ()
    tracks: Tuple[str, ...] = ()
    filters: FilterCriteria = field(default_factory=FilterCriteria)

# ---------------- Actions ----------------
@dataclass(frozen=True)
class SetEvents:
    events: Tuple[EventRecord, ...]

@dataclass(frozen=True)
class SetFilter:
    key: str
    value: Any

Action = Union[SetEvents, SetFilter]
Listener = Callable[[ScheduleState], None]

class ScheduleStore:
    """Observable state container for one schedule view."""

    def __init__(self, events: Optional[Iterable[EventRecord]] = None,
                 filters: Optional[FilterCriteria] = None) -> None:
        self._state = ScheduleState(filters=filters or FilterCriteria())
        self._listeners: List[Listener] = []
        if events is not None:
            self.dispatch(SetEvents(tuple(events)))

    def get_state(self) -> ScheduleState:
        return self._state

    # ---------------- Subscriptions ----------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self) -> None:
        # copy: a listener may unsubscribe while we iterate
        for listener in list(self._listeners):
            listener(self._state)

    # ---------------- Transitions ----------------
    def dispatch(self, action: Action) -> ScheduleState:
        """Apply one action, recompute the view and notify subscribers."""
        s = self._state
        if isinstance(action, SetEvents):
            events = tuple(action.events)
            dates = tuple(unique_dates(events))
            filters = s.filters
            if dates and not filters.date:
                filters = dataclasses.replace(filters, date=dates[0])
            s = dataclasses.replace(s, all_events=events, dates=dates,
                                    tracks=tuple(unique_tracks(events)), filters=filters)
            logger.info("Loaded %d events (%d dates, %d tracks)", len(events), len(dates), len(s.tracks))
        elif isinstance(action, SetFilter):
            if action.key not in FILTER_KEYS:
                raise ValueError(f"filter key must be one of: {', '.join(FILTER_KEYS)}")
            s = dataclasses.replace(s, filters=dataclasses.replace(s.filters, **{action.key: action.value}))
        else:
            raise TypeError(f"Unknown action: {action!r}")

        self._state = dataclasses.replace(s, filtered_events=tuple(apply_filters(s.all_events, s.filters)))
        self._notify()
        return self._state

    def set_events(self, events: Iterable[EventRecord]) -> ScheduleState:
        return self.dispatch(SetEvents(tuple(events)))

    def set_filter(self, key: str, value: Any) -> ScheduleState:
        return self.dispatch(SetFilter(key, value))

    # ---------------- Lookups / exports ----------------
    def find(self, event_id: str) -> Optional[EventRecord]:
        """First event with this id (placeholder ids can repeat)."""
        for e in self._state.all_events:
            if e.id == event_id:
                return e
        return None

    def export_csv(self, path: str) -> None:
        rows = self._state.filtered_events
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["id", "name", "track", "date", "start_time", "end_time",
                        "location", "speaker", "description", "tags"])
            for e in rows:
                w.writerow([e.id, e.name, e.track, e.date, e.start_time, e.end_time,
                            e.location, e.speaker, e.description, ", ".join(e.visible_tags())])

    def export_json(self, path: str) -> None:
        """Export the current view to a JSON file (list of objects)."""
        payload = [e.to_dict() for e in self._state.filtered_events]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

# ---------------- Helpers ----------------
def _matches(e: EventRecord, f: FilterCriteria, needle: str) -> bool:
    if f.date and e.date != f.date:
        return False
    if f.track != ALL_TRACKS and e.track != f.track:
        return False
    if needle:
        if needle not in e.name.lower() and needle not in (e.speaker or "").lower():
            return False
    return True

def apply_filters(events: Iterable[EventRecord], f: FilterCriteria) -> List[EventRecord]:
    """Filter by criteria, then stable-sort by start time of day."""
    needle = (f.search or "").lower()
    keyed = [(time_of_day_seconds(e.start_time), e) for e in events if _matches(e, f, needle)]
    return [e for _, e in merge_sort(keyed, key=lambda p: p[0])]
