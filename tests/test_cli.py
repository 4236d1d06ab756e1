"""REPL command handling."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from schedview import cli
from schedview.cli import Session, describe_view, format_date_tab, handle
from schedview.store import ScheduleStore


@pytest.fixture
def session(sample_events) -> Session:
    return Session(store=ScheduleStore(sample_events), clock=lambda: datetime(2024, 5, 1, 9, 30))


def test_show_marks_live_events(session, capsys):
    handle(session, "show")
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("[e2]")
    assert out[1].endswith("** LIVE NOW **")
    assert len(out) == 3


def test_filters_via_commands(session, capsys):
    handle(session, 'track "Design"')
    assert session.store.get_state().filters.track == "Design"
    assert [e.id for e in session.store.get_state().filtered_events] == ["e3"]
    handle(session, "track all")
    handle(session, "date all")
    assert session.store.get_state().filters.date is None
    handle(session, "search grace hopper")
    assert [e.id for e in session.store.get_state().filtered_events] == ["e4"]
    handle(session, "clear")
    assert len(session.store.get_state().filtered_events) == 4


def test_empty_view_message(session, capsys):
    handle(session, "search nobody")
    handle(session, "show")
    assert "No events found matching your criteria." in capsys.readouterr().out


def test_dates_and_tracks_listing(session, capsys):
    handle(session, "dates")
    handle(session, "tracks")
    out = capsys.readouterr().out
    assert "* 2024-05-01" in out
    assert "* All Tracks (all)" in out
    assert "  Design" in out


def test_live_banner(session, capsys):
    handle(session, "live")
    assert capsys.readouterr().out.strip() == "Live Now: Keynote | Next in 45m"


def test_link_and_info(session, capsys):
    handle(session, "link e3")
    assert capsys.readouterr().out.startswith("https://calendar.google.com/calendar/r/eventedit?text=Design%20Systems")
    handle(session, "info e2")
    out = capsys.readouterr().out
    assert "No Speaker designated" in out
    with pytest.raises(ValueError):
        handle(session, "info nope")


def test_export_json(session, tmp_path, capsys):
    path = tmp_path / "out.json"
    handle(session, f'export json "{path}"')
    assert [row["id"] for row in json.loads(path.read_text(encoding="utf-8"))] == ["e2", "e1", "e3"]


def test_unknown_command(session, capsys):
    handle(session, "frobnicate")
    assert "Unknown command" in capsys.readouterr().out


def test_reload_failure_is_reported(session, capsys, monkeypatch):
    from schedview.loader import ScheduleFetchError

    def boom():
        raise ScheduleFetchError("API key not valid. Please pass a valid API key.")

    monkeypatch.setattr(session, "load", boom)
    assert session.reload() is False
    out = capsys.readouterr().out
    assert "Error loading schedule: API key not valid. Please pass a valid API key." in out
    assert len(session.store.get_state().all_events) == 4


def test_describe_view(session):
    assert describe_view(session.store.get_state()) == "View: 3 of 4 events | date=2024-05-01 track=all"


def test_format_date_tab():
    assert format_date_tab("2024-05-01") == "Wed, May 1"
    assert format_date_tab("Hackathon Day") == "Hackathon Day"


def test_main_with_file(tmp_path, monkeypatch, capsys):
    path = tmp_path / "schedule.csv"
    path.write_text("ID,Name,Track,Date,Start,End\nk1,Keynote,General,2024-05-01,09:00,10:00\n", encoding="utf-8")
    commands = iter(["show", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))
    cli.main(["--file", str(path)])
    out = capsys.readouterr().out
    assert "View: 1 of 1 events" in out
    assert "[k1] 09:00-10:00 | Keynote" in out
