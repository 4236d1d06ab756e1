"""
schedview Command Line Interface (CLI)
======================================

Interactive terminal viewer, run like:

    python -m schedview.cli --sheet-id <ID> --api-key <KEY>
    python -m schedview.cli --file schedule.xlsx
    python -m schedview.cli                      (mock data if nothing is configured)

It demonstrates:
- Argument parsing (argparse) layered over environment configuration
- A REPL loop (Read-Eval-Print Loop) for commands
- A store subscriber that reports every change of the view
- A background ticker that refreshes the live banner

The CLI never writes to the sheet. It loads the schedule once (or on
`reload`) and works on the in-memory collection.
"""

from __future__ import annotations
import argparse, logging, shlex
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence
from .calendar_link import build_link
from .config import SheetsConfig
from .live import LiveStatus, evaluate
from .loader import ScheduleFetchError, fetch_schedule, load_schedule_file
from .models import EventRecord, ALL_TRACKS
from .store import ScheduleState, ScheduleStore
from .timeparse import parse_date
from .timers import LIVE_INTERVAL_SECONDS, LiveTicker


HELP = """
Commands:
  help
  show [n]                        current view (default: all rows)
  stats
  dates | tracks                  available date tabs / track options

  date "<date>" | date all        (example: date 2024-05-01)
  track "<track>" | track all     (example: track Design)
  search "<text>"                 name or speaker, case-insensitive; no text clears
  clear                           track=all, search=""

  live                            "Live Now" / "Up Next" banner
  watch [seconds]                 refresh the banner in the background (default 60)
  unwatch

  info <id>
  link <id>                       Google Calendar link
  export csv "<out.csv>"
  export json "<out.json>"
  report "<out.docx>" [current|full]

  reload
  quit
"""

@dataclass
class Session:
    """Everything one REPL run works with."""
    store: ScheduleStore
    config: SheetsConfig = field(default_factory=SheetsConfig)
    file_path: Optional[str] = None
    clock: Callable[[], datetime] = datetime.now
    # filter/export commands, for the report
    command_log: List[str] = field(default_factory=list)
    ticker: Optional[LiveTicker] = None

    def load(self) -> List[EventRecord]:
        if self.file_path:
            return load_schedule_file(self.file_path)
        return fetch_schedule(self.config, now=self.clock())

    def reload(self) -> bool:
        """Fetch and replace the collection; prints the error and returns False on failure."""
        print("Loading schedule...")
        try:
            events = self.load()
        except ScheduleFetchError as e:
            print(f"Error loading schedule: {e}")
            print("Please check your API key and sheet id (SCHEDVIEW_SHEET_ID / SCHEDVIEW_API_KEY).")
            return False
        self.store.set_events(events)
        return True

    def status(self) -> LiveStatus:
        return evaluate(self.store.get_state().all_events, self.clock())


# ---------------- Rendering ----------------
def format_date_tab(date: str) -> str:
    dt = parse_date(date)
    # fall back to the raw cell when it is not a date
    return date if dt is None else dt.strftime("%a, %b %d").replace(" 0", " ")

def describe_view(state: ScheduleState) -> str:
    f = state.filters
    parts = [f"date={f.date or 'all'}", f"track={f.track}"]
    if f.search:
        parts.append(f"search={f.search!r}")
    return f"View: {len(state.filtered_events)} of {len(state.all_events)} events | " + " ".join(parts)

def _print_rows(rows: Sequence[EventRecord], status: Optional[LiveStatus] = None) -> None:
    if not rows:
        print("No events found matching your criteria.")
        return
    for e in rows:
        line = f"[{e.id}] {e.start_time}-{e.end_time} | {e.name} | {e.track} | {e.location}"
        if e.speaker:
            line += f" | {e.speaker}"
        if status is not None and status.is_live(e):
            line += "  ** LIVE NOW **"
        print(line)

def _print_banner(status: LiveStatus) -> None:
    print(status.banner() or "Nothing live or upcoming.")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the schedview CLI.

    1) Resolve configuration (env / .env, then flags)
    2) Load the schedule into a store
    3) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(prog="schedview")
    ap.add_argument("--file", help="Path to a .xlsx/.csv export instead of the Sheets API")
    ap.add_argument("--sheet-id", help="Spreadsheet id (overrides SCHEDVIEW_SHEET_ID)")
    ap.add_argument("--api-key", help="Google API key (overrides SCHEDVIEW_API_KEY)")
    ap.add_argument("--range", dest="sheet_range", help="Sheet range, e.g. Sheet1!A:J")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log fetch details")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    config = SheetsConfig.from_env()
    if args.sheet_id: config.sheet_id = args.sheet_id
    if args.api_key: config.api_key = args.api_key
    if args.sheet_range: config.sheet_range = args.sheet_range

    session = Session(store=ScheduleStore(), config=config, file_path=args.file)
    session.store.subscribe(lambda state: print(describe_view(state)))
    if session.reload():
        _print_banner(session.status())

    print("Type 'help' for commands.")
    try:
        while True:
            try:
                line = input("schedview> ")
                stripped = line.strip()
                if stripped:
                    cmd0 = stripped.split()[0].lower()
                    if cmd0 in ("date", "track", "search", "clear", "export", "reload"):
                        session.command_log.append(stripped)
            except EOFError:
                break
            if not line.strip():
                continue
            if line.strip().lower() in ("quit", "exit"):
                break
            try:
                handle(session, line)
            except Exception as e:
                print(f"Error: {e}")
    finally:
        if session.ticker is not None:
            session.ticker.stop()

def handle(session: Session, line: str) -> None:
    """Handle one CLI command line."""
    store = session.store
    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "show":
        rows = list(store.get_state().filtered_events)
        if len(parts) >= 2:
            rows = rows[:int(parts[1])]
        _print_rows(rows, session.status())
        return

    if cmd == "stats":
        s = store.get_state()
        print(describe_view(s))
        print(f"Dates: {len(s.dates)} | Tracks: {len(s.tracks)}")
        return

    if cmd == "dates":
        s = store.get_state()
        if not s.dates:
            print("No dates.")
        for d in s.dates:
            mark = "*" if d == s.filters.date else " "
            print(f"{mark} {d}  ({format_date_tab(d)})")
        return

    if cmd == "tracks":
        s = store.get_state()
        print(("* " if s.filters.track == ALL_TRACKS else "  ") + "All Tracks (all)")
        for t in s.tracks:
            print(("* " if t == s.filters.track else "  ") + t)
        return

    if cmd == "date":
        if len(parts) < 2:
            raise ValueError('usage: date "<date>" | date all')
        value = parts[1]
        store.set_filter("date", None if value.lower() == "all" else value)
        return

    if cmd == "track":
        if len(parts) < 2:
            raise ValueError('usage: track "<track>" | track all')
        value = parts[1]
        store.set_filter("track", ALL_TRACKS if value.lower() == ALL_TRACKS else value)
        return

    if cmd == "search":
        store.set_filter("search", " ".join(parts[1:]))
        return

    if cmd == "clear":
        store.set_filter("track", ALL_TRACKS)
        store.set_filter("search", "")
        return

    if cmd == "live":
        _print_banner(session.status())
        return

    if cmd == "watch":
        interval = float(parts[1]) if len(parts) >= 2 else LIVE_INTERVAL_SECONDS
        if session.ticker is not None:
            session.ticker.stop()
        session.ticker = LiveTicker(store, on_tick=_print_banner, interval=interval, clock=session.clock)
        session.ticker.start()
        print(f"Refreshing the live banner every {interval:g}s. Type 'unwatch' to stop.")
        return

    if cmd == "unwatch":
        if session.ticker is None:
            print("Not watching.")
            return
        session.ticker.stop()
        session.ticker = None
        print("Stopped.")
        return

    if cmd in ("info", "link"):
        if len(parts) < 2:
            raise ValueError(f"usage: {cmd} <id>")
        e = store.find(parts[1])
        if e is None:
            raise ValueError(f"No event with id {parts[1]!r}")
        if cmd == "link":
            print(build_link(e))
            return
        print(e.name)
        print(f"  Track:    {e.track}")
        print(f"  When:     {e.date} | {e.start_time} - {e.end_time}")
        print(f"  Where:    {e.location}")
        print(f"  Speaker:  {e.speaker or 'No Speaker designated'}")
        if e.visible_tags():
            print(f"  Tags:     {', '.join(e.visible_tags())}")
        print(f"  {e.description}")
        return

    if cmd == "export":
        # export <csv|json> "<path>"
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt = parts[1].lower()
        out_path = parts[2]
        if not store.get_state().filtered_events:
            print("Nothing to export: current view is empty.")
            return
        if fmt == "csv":
            store.export_csv(out_path)
            print(f"Exported CSV to {out_path}")
            return
        if fmt == "json":
            store.export_json(out_path)
            print(f"Exported JSON to {out_path}")
            return
        print("Unknown export format. Use: csv or json")
        return

    if cmd == "report":
        # report "<path.docx>" [current|full]
        from .report import generate_docx_report, ReportConfig
        if len(parts) < 2:
            raise ValueError('usage: report "<path.docx>" [current|full]')
        path = parts[1]
        scope = parts[2].lower() if len(parts) >= 3 else "current"
        if scope not in ("current", "full"):
            raise ValueError("report scope must be: current | full")
        s = store.get_state()
        if scope == "full":
            evs, label = list(s.all_events), "Full Schedule"
        else:
            evs, label = list(s.filtered_events), "Current View"
        cfg = ReportConfig(
            source_name=session.file_path or ("Google Sheets" if session.config.is_configured else "Mock data"),
            command_log=session.command_log,
        )
        generate_docx_report(evs, path, config=cfg, scope_label=label)
        print(f"Report written to {path}")
        return

    if cmd == "reload":
        session.reload()
        return

    print("Unknown command. Type 'help'.")
    return

if __name__ == "__main__":
    main()
