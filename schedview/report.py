from __future__ import annotations

"""
Schedule report generator
-------------------------
This module writes a DOCX agenda for a list of EventRecord objects (usually
the current filtered view).

Design goals:
- Keep schedview usable even if report dependencies are missing (lazy imports).
- Only draw charts that say something for the current scope: a single-track
  view gets no "events per track" chart, a single-day view no "events per day".
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import os
import tempfile
from collections import Counter

from .calendar_link import build_link
from .indices import unique_dates
from .live import event_bounds
from .models import EventRecord
from .timeparse import time_of_day_seconds


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "Event Schedule"
    subtitle: str = "Agenda exported from schedview"
    source_name: str = "Google Sheets"

    # How many categories to show in bar charts
    top_n: int = 12

    # Add an "Add to calendar" link under each agenda entry
    include_links: bool = True

    # Optional: list of CLI commands that produced the current view
    command_log: Optional[List[str]] = None


def _session_minutes(events: Sequence[EventRecord]) -> List[float]:
    """Lengths of sessions whose start and end both resolve (minutes, > 0)."""
    out: List[float] = []
    for e in events:
        bounds = event_bounds(e)
        if bounds is None:
            continue
        minutes = (bounds[1] - bounds[0]).total_seconds() / 60.0
        if minutes > 0:
            out.append(minutes)
    return out


def _choose_bins(n: int) -> int:
    if n <= 10:
        return 5
    if n <= 50:
        return 10
    return 20


def _group_by_date(events: Sequence[EventRecord]) -> List[Tuple[str, List[EventRecord]]]:
    groups: Dict[str, List[EventRecord]] = {}
    for e in events:
        groups.setdefault(e.date, []).append(e)
    order = unique_dates(events)
    if "" in groups:
        order.append("")
    out = []
    for d in order:
        # stable: same-time sessions keep sheet order
        rows = sorted(groups[d], key=lambda e: time_of_day_seconds(e.start_time))
        out.append((d, rows))
    return out


def generate_docx_report(
    events: Sequence[EventRecord],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    scope_label: str = "Current View",
) -> str:
    """
    Generate a DOCX agenda + charts for a list of events.

    The sheet itself is never modified; this only reads the in-memory records.
    """
    config = config or ReportConfig()

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if not events:
        raise ValueError("No events to report on (the view is empty).")

    # -----------------------------
    # 1) Counts
    # -----------------------------
    c_track = Counter(e.track for e in events if e.track)
    c_date = Counter(e.date for e in events if e.date)
    speakers = sorted({e.speaker for e in events if e.speaker})
    lengths = _session_minutes(events)
    dates = unique_dates(events)

    # -----------------------------
    # 2) Charts
    # -----------------------------
    tmpdir = tempfile.mkdtemp(prefix="schedview_report_")
    chart_paths: List[Tuple[str, str]] = []

    def _save(filename: str) -> str:
        path = os.path.join(tmpdir, filename)
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close()
        return path

    def _bar(title: str, labels: List[str], values: List[int], filename: str) -> None:
        plt.figure()
        plt.bar(labels, values)
        plt.xticks(rotation=45, ha="right")
        plt.title(title)
        plt.ylabel("Sessions")
        chart_paths.append((title, _save(filename)))

    if len(c_track) > 1:
        top = c_track.most_common(config.top_n)
        _bar(f"Sessions per Track ({scope_label})", [k for k, _ in top], [v for _, v in top],
             "per_track.png")

    if len(c_date) > 1:
        _bar(f"Sessions per Day ({scope_label})", [d for d in dates], [c_date[d] for d in dates],
             "per_day.png")

    if len(lengths) >= 2:
        x = np.array(lengths)
        plt.figure()
        counts, bins, patches = plt.hist(x, bins=_choose_bins(len(x)), edgecolor="black", linewidth=0.8)
        for i, p in enumerate(patches):
            p.set_facecolor("C0" if i % 2 == 0 else "C1")
        plt.title(f"Session Length ({scope_label})")
        plt.xlabel("Minutes")
        plt.ylabel("Sessions")
        chart_paths.append((f"Session Length ({scope_label})", _save("session_length.png")))

    # -----------------------------
    # 3) Build DOCX
    # -----------------------------
    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Source", config.source_name)
    _kv("Scope", scope_label)
    _kv("Sessions", str(len(events)))
    if dates:
        _kv("Days", f"{dates[0]} to {dates[-1]}" if len(dates) > 1 else dates[0])
    _kv("Tracks", ", ".join(sorted(c_track)) or "-")
    if speakers:
        _kv("Speakers", str(len(speakers)))

    if config.command_log:
        doc.add_paragraph("")
        doc.add_heading("How this view was selected", level=1)
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    # Agenda, one table per day
    doc.add_paragraph("")
    doc.add_heading("Agenda", level=1)
    for date, rows in _group_by_date(events):
        doc.add_heading(date or "Date to be announced", level=2)
        t = doc.add_table(rows=1, cols=5)
        h = t.rows[0].cells
        h[0].text = "Time"
        h[1].text = "Session"
        h[2].text = "Track"
        h[3].text = "Location"
        h[4].text = "Speaker"
        for e in rows:
            r = t.add_row().cells
            r[0].text = f"{e.start_time} - {e.end_time}" if e.end_time else e.start_time
            r[1].text = e.name
            r[2].text = e.track
            r[3].text = e.location
            r[4].text = e.speaker

    doc.add_paragraph("")
    doc.add_heading("Session details", level=1)
    for date, rows in _group_by_date(events):
        for e in rows:
            doc.add_heading(e.name, level=3)
            _kv("When", f"{e.date} | {e.start_time} - {e.end_time}")
            _kv("Where", e.location)
            _kv("Speaker", e.speaker or "No Speaker designated")
            tags = e.visible_tags()
            if tags:
                _kv("Tags", ", ".join(tags))
            doc.add_paragraph(e.description)
            if config.include_links:
                _kv("Add to calendar", build_link(e))

    if chart_paths:
        doc.add_paragraph("")
        doc.add_heading("Charts", level=1)
        for title, path in chart_paths:
            doc.add_paragraph(title)
            doc.add_picture(path, width=Inches(6.0))
            doc.add_paragraph("")

    # -----------------------------
    # Footer
    # -----------------------------
    from . import __version__ as schedview_version
    from datetime import datetime as _dt
    generated_at = _dt.now().isoformat(timespec="seconds")

    doc.add_paragraph("")
    doc.add_paragraph(f"schedview version: {schedview_version}")
    doc.add_paragraph(f"Report generated at: {generated_at}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
