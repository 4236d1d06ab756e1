"""
Live status ("Live Now" / "Up Next")
====================================

Given the event collection and the current time, work out which events are
running right now and which one starts next.

- An event is LIVE when start <= now <= end (both ends inclusive).
- FUTURE when start > now, PAST otherwise.
- Events whose start or end cannot be resolved are ignored entirely.

This module only reads events; it never touches the store.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple
from .models import EventRecord
from .timeparse import Resolved, resolve_datetime

# While something is live, the next event is only announced this close.
NEXT_WINDOW_MINUTES = 60

class LiveWindow(enum.Enum):
    PAST = "past"
    LIVE = "live"
    FUTURE = "future"

def event_bounds(event: EventRecord) -> Optional[Tuple[datetime, datetime]]:
    start = resolve_datetime(event.date, event.start_time)
    end = resolve_datetime(event.date, event.end_time)
    if isinstance(start, Resolved) and isinstance(end, Resolved):
        return start.value, end.value
    return None

def classify(event: EventRecord, now: datetime) -> Optional[LiveWindow]:
    """Temporal relation of `event` to `now`; None when it cannot be placed."""
    bounds = event_bounds(event)
    if bounds is None:
        return None
    start, end = bounds
    if start <= now <= end:
        return LiveWindow.LIVE
    if start > now:
        return LiveWindow.FUTURE
    return LiveWindow.PAST

def format_countdown(minutes: int) -> str:
    """'1h 5m', or just '45m' when under an hour."""
    hours, mins = divmod(max(minutes, 0), 60)
    return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"

@dataclass(frozen=True)
class LiveStatus:
    now: datetime
    live: Tuple[EventRecord, ...] = ()
    next_event: Optional[EventRecord] = None
    next_start: Optional[datetime] = None
    # floored whole minutes until `next_start`
    minutes_to_next: Optional[int] = None
    past: Tuple[EventRecord, ...] = field(default=(), repr=False)

    def is_live(self, event: EventRecord) -> bool:
        return any(e is event for e in self.live)

    def banner(self) -> Optional[str]:
        """One-line banner text, or None when there is nothing to show."""
        if self.live:
            text = "Live Now: " + ", ".join(e.name for e in self.live)
            if self.next_event is not None and self.minutes_to_next is not None \
                    and self.minutes_to_next <= NEXT_WINDOW_MINUTES:
                text += f" | Next in {self.minutes_to_next}m"
            return text
        if self.next_event is not None and self.minutes_to_next is not None:
            return f"Up Next: {self.next_event.name} | Starts in {format_countdown(self.minutes_to_next)}"
        return None

def evaluate(events: Iterable[EventRecord], now: datetime) -> LiveStatus:
    """Classify every event against `now` and pick the next one to start."""
    live: List[EventRecord] = []
    past: List[EventRecord] = []
    next_event: Optional[EventRecord] = None
    next_start: Optional[datetime] = None

    for e in events:
        window = classify(e, now)
        if window is None:
            continue
        if window is LiveWindow.LIVE:
            live.append(e)
        elif window is LiveWindow.FUTURE:
            start = event_bounds(e)[0]
            # strict `<`: the first event wins a tie
            if next_start is None or start < next_start:
                next_event, next_start = e, start
        else:
            past.append(e)

    minutes = None
    if next_start is not None:
        minutes = int((next_start - now).total_seconds() // 60)
    return LiveStatus(now=now, live=tuple(live), next_event=next_event,
                      next_start=next_start, minutes_to_next=minutes, past=tuple(past))
