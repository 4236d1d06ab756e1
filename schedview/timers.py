"""
Timers (debounce, live ticker)
==============================

- `debounce(wait)`: trailing-edge debounce. Only the last call made within
  `wait` seconds runs, with that call's arguments. Used to coalesce search
  input before it reaches the store; `debounced_search(store)` wires it to
  the search filter with the default 0.3 s window.
- `LiveTicker`: re-evaluates the live status of the store's events every
  `interval` seconds on a background thread. It only reads state snapshots.
"""

from __future__ import annotations
import functools
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional
from .live import LiveStatus, evaluate
from .store import ScheduleStore

logger = logging.getLogger(__name__)

LIVE_INTERVAL_SECONDS = 60.0
SEARCH_DEBOUNCE_SECONDS = 0.3

def debounce(wait: float) -> Callable[[Callable[..., Any]], Callable[..., None]]:
    """Decorator: delay calls until `wait` seconds pass without a new call.

    The wrapped function gains `.cancel()` (drop a pending call) and
    `.flush()` (run a pending call now).
    """
    def decorator(func: Callable[..., Any]) -> Callable[..., None]:
        lock = threading.Lock()
        pending: dict = {"timer": None, "args": (), "kwargs": {}}

        def _fire() -> None:
            with lock:
                if pending["timer"] is None:
                    return
                pending["timer"] = None
                args, kwargs = pending["args"], pending["kwargs"]
            func(*args, **kwargs)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            with lock:
                if pending["timer"] is not None:
                    pending["timer"].cancel()
                pending["args"], pending["kwargs"] = args, kwargs
                t = threading.Timer(wait, _fire)
                t.daemon = True
                pending["timer"] = t
                t.start()

        def cancel() -> None:
            with lock:
                if pending["timer"] is not None:
                    pending["timer"].cancel()
                    pending["timer"] = None

        def flush() -> None:
            with lock:
                if pending["timer"] is not None:
                    pending["timer"].cancel()
            _fire()

        wrapper.cancel = cancel  # type: ignore[attr-defined]
        wrapper.flush = flush  # type: ignore[attr-defined]
        return wrapper
    return decorator

def debounced_search(store: ScheduleStore, wait: float = SEARCH_DEBOUNCE_SECONDS) -> Callable[[str], None]:
    """A `set_filter("search", text)` for `store` that only fires once typing pauses."""
    return debounce(wait)(lambda text: store.set_filter("search", text))

@dataclass
class LiveTicker:
    store: ScheduleStore
    on_tick: Callable[[LiveStatus], None]
    interval: float = LIVE_INTERVAL_SECONDS
    clock: Callable[[], datetime] = datetime.now
    _stop: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    _thread: Optional[threading.Thread] = field(default=None, init=False, repr=False)

    def __enter__(self) -> "LiveTicker":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._thread is not None

    def tick(self) -> LiveStatus:
        """Evaluate once, synchronously, and hand the result to `on_tick`."""
        status = evaluate(self.store.get_state().all_events, self.clock())
        self.on_tick(status)
        return status

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="schedview-live", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=1)
            self._thread = None

    def _loop(self) -> None:
        # first evaluation after one full interval, like a browser setInterval
        while not self._stop.wait(self.interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Live status update failed")
