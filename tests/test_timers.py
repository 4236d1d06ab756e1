"""Debounce and the live ticker."""

from __future__ import annotations

import threading
import time
from datetime import datetime

from schedview.store import ScheduleStore
from schedview.timers import LiveTicker, debounce, debounced_search


def test_debounce_runs_last_call_once():
    calls = []
    done = threading.Event()

    @debounce(0.05)
    def apply(value):
        calls.append(value)
        done.set()

    apply("d")
    apply("de")
    apply("des")
    assert done.wait(2.0)
    time.sleep(0.1)
    assert calls == ["des"]


def test_debounce_cancel_drops_pending_call():
    calls = []
    apply = debounce(0.05)(lambda v: calls.append(v))
    apply("x")
    apply.cancel()
    time.sleep(0.15)
    assert calls == []


def test_debounce_flush_runs_immediately():
    calls = []
    apply = debounce(5.0)(lambda v: calls.append(v))
    apply("now")
    apply.flush()
    apply.flush()
    assert calls == ["now"]


def test_debounced_search_reaches_store(sample_events):
    store = ScheduleStore(sample_events)
    seen = threading.Event()
    store.subscribe(lambda s: seen.set())
    set_search = debounced_search(store, wait=0.02)
    set_search("ke")
    set_search("key")
    assert seen.wait(2.0)
    assert store.get_state().filters.search == "key"


def test_debounced_search_waits_for_typing_pause(sample_events):
    store = ScheduleStore(sample_events)
    changes = []
    store.subscribe(lambda s: changes.append(s.filters.search))
    set_search = debounced_search(store)
    set_search("keynote")
    assert changes == []
    set_search.flush()
    assert changes == ["keynote"]
    assert [e.id for e in store.get_state().filtered_events] == ["e1"]


def test_tick_reads_without_mutating(sample_events):
    store = ScheduleStore(sample_events)
    before = store.get_state()
    banners = []
    ticker = LiveTicker(store, on_tick=lambda s: banners.append(s.banner()),
                        clock=lambda: datetime(2024, 5, 1, 9, 30))
    status = ticker.tick()
    assert store.get_state() is before
    assert [e.id for e in status.live] == ["e1"]
    assert banners == ["Live Now: Keynote | Next in 45m"]


def test_ticker_runs_in_background_until_stopped(sample_events):
    store = ScheduleStore(sample_events)
    ticked = threading.Event()
    ticker = LiveTicker(store, on_tick=lambda s: ticked.set(), interval=0.01,
                        clock=lambda: datetime(2024, 5, 1, 9, 30))
    with ticker:
        assert ticker.running
        assert ticked.wait(2.0)
    assert not ticker.running
