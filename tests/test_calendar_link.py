"""Google Calendar deep links."""

from __future__ import annotations

from datetime import datetime
from urllib.parse import parse_qs, urlsplit

from schedview.calendar_link import CALENDAR_URL, build_link, compact_utc
from schedview.models import EventRecord


def _query(url: str) -> dict:
    return parse_qs(urlsplit(url).query)


def test_link_with_dates():
    ev = EventRecord(id="a", name="Keynote", date="2024-05-01", start_time="09:00", end_time="10:30",
                     location="Main Stage", description="Opening talk")
    url = build_link(ev)
    assert url.startswith(CALENDAR_URL + "?text=Keynote&dates=")
    start = compact_utc(datetime(2024, 5, 1, 9, 0))
    end = compact_utc(datetime(2024, 5, 1, 10, 30))
    assert f"dates={start}/{end}" in url
    q = _query(url)
    assert q["details"] == ["Opening talk"]
    assert q["location"] == ["Main Stage"]


def test_compact_utc_shape():
    value = compact_utc(datetime(2024, 5, 1, 9, 0))
    assert len(value) == 16
    assert value[8] == "T" and value.endswith("Z")
    assert value.replace("T", "").replace("Z", "").isdigit()


def test_unparsable_date_gives_text_only_link():
    ev = EventRecord(id="a", name="Mystery", date="sometime", start_time="later", end_time="")
    url = build_link(ev)
    assert "text=" in url and "details=" in url and "location=" in url
    assert "dates=" not in url


def test_missing_date_gives_text_only_link():
    url = build_link(EventRecord(id="a", name="Undated", start_time="09:00"))
    assert "dates=" not in url


def test_unresolved_end_reuses_start():
    ev = EventRecord(id="a", name="Open end", date="2024-05-01", start_time="20:00", end_time="late")
    start = compact_utc(datetime(2024, 5, 1, 20, 0))
    assert f"dates={start}/{start}" in build_link(ev)


def test_values_are_percent_encoded():
    ev = EventRecord(id="a", name="Q&A: Tools", description="Bring laptops/chargers", location="Room #2")
    url = build_link(ev)
    assert "text=Q%26A%3A%20Tools" in url
    assert "details=Bring%20laptops%2Fchargers" in url
    assert "location=Room%20%232" in url
