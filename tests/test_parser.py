"""Row parsing: header handling, defaults, dropped rows, placeholder ids."""

from __future__ import annotations

import pytest

from schedview.models import DEFAULT_DESCRIPTION, DEFAULT_LOCATION, DEFAULT_TRACK
from schedview.parser import parse_row, parse_rows

HEADER = ["ID", "Name", "Track", "Date", "Start", "End", "Location", "Speaker", "Description", "Tags"]


@pytest.mark.parametrize("rows", [None, [], [HEADER]])
def test_fewer_than_two_rows_gives_nothing(rows):
    assert parse_rows(rows) == []


def test_full_row_maps_by_position():
    row = ["k1", "Keynote", "Main", "2024-05-01", "09:00", "10:00", "Hall", "Ada", "Opening talk", "intro, welcome"]
    (ev,) = parse_rows([HEADER, row])
    assert ev.id == "k1"
    assert ev.name == "Keynote"
    assert ev.track == "Main"
    assert ev.date == "2024-05-01"
    assert ev.start_time == "09:00"
    assert ev.end_time == "10:00"
    assert ev.location == "Hall"
    assert ev.speaker == "Ada"
    assert ev.description == "Opening talk"
    assert ev.tags == ("intro", "welcome")


def test_header_is_not_validated():
    rows = [["whatever", "columns"], ["", "Lunch"]]
    assert [e.name for e in parse_rows(rows)] == ["Lunch"]


def test_blank_optional_cells_use_defaults():
    (ev,) = parse_rows([HEADER, ["", "Lunch", "", "", "", "", "", "", "", ""]])
    assert ev.track == DEFAULT_TRACK == "General"
    assert ev.location == DEFAULT_LOCATION == "TBA"
    assert ev.description == DEFAULT_DESCRIPTION == "No description available."
    assert ev.speaker == ""
    assert ev.tags == ()


def test_short_row_uses_defaults():
    (ev,) = parse_rows([HEADER, ["x", "Lunch"]])
    assert ev.id == "x"
    assert ev.track == "General"
    assert ev.date == ""


@pytest.mark.parametrize("name", ["", "   ", None])
def test_rows_without_name_are_dropped(name):
    rows = [HEADER, ["a", name, "Track"], ["b", "Kept"]]
    assert [e.id for e in parse_rows(rows)] == ["b"]


def test_missing_name_cell_is_dropped():
    assert parse_row(["only-id"], 0) is None


def test_placeholder_ids_count_dropped_rows():
    rows = [HEADER, ["", "First"], ["", ""], ["", "Third"]]
    assert [e.id for e in parse_rows(rows)] == ["evt-0", "evt-2"]


def test_tags_are_trimmed_and_keep_empty_entries():
    (ev,) = parse_rows([HEADER, ["", "Talk", "", "", "", "", "", "", "", " a , ,b"]])
    assert ev.tags == ("a", "", "b")
    assert ev.visible_tags() == ("a", "b")
