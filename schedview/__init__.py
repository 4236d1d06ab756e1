"""
schedview package
=================

A terminal viewer for event schedules kept in a spreadsheet.

- The CLI entry point is in `schedview/cli.py`.
- The observable store (filters, sorting, notifications) is in `schedview/store.py`.
- Row parsing is in `schedview/parser.py`; fetching is in `schedview/loader.py`.
- "Live now" / "up next" logic is in `schedview/live.py`.
"""

__version__ = '0.3.1'
