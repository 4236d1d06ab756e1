from __future__ import annotations

from datetime import datetime

import pytest

from schedview.models import EventRecord


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 5, 1, 9, 0)


@pytest.fixture
def sample_events() -> list:
    return [
        EventRecord(id="e1", name="Keynote", track="General", date="2024-05-01",
                    start_time="09:00", end_time="10:00", location="Main Stage", speaker="Ada Lovelace"),
        EventRecord(id="e2", name="Breakfast", track="General", date="2024-05-01",
                    start_time="08:30", end_time="09:00"),
        EventRecord(id="e3", name="Design Systems", track="Design", date="2024-05-01",
                    start_time="10:15", end_time="11:00", speaker="Jane Doe"),
        EventRecord(id="e4", name="Demo Day", track="Business", date="2024-05-02",
                    start_time="14:00", end_time="16:00", speaker="Grace Hopper"),
    ]
