"""
Run summary rendering.

This module renders the statistics of a finished notifier run as a table on
the error stream, keeping standard output free for notifications.
"""

import sys
from typing import Any, Dict, Optional, TextIO

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table


ROWS = [
    ("lines_read", "Lines Read"),
    ("lines_accepted", "Lines Accepted"),
    ("lines_discarded", "Lines Discarded"),
    ("empty_lines", "Empty Lines"),
    ("fragmented_lines", "Fragmented Lines"),
    ("fragments_discarded", "Fragments Discarded"),
    ("notifications_sent", "Notifications Sent"),
    ("bytes_read", "Bytes Read"),
    ("bytes_written", "Bytes Written"),
]


def create_summary_table(summary: Dict[str, Any]) -> Table:
    """Create the statistics table for a run summary."""
    table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
    table.add_column("Counter", style="cyan", width=20)
    table.add_column("Value", style="white", justify="right")

    for key, label in ROWS:
        value = summary.get(key, 0)
        style = None
        if key == "lines_discarded" and value:
            style = "red"
        table.add_row(label, str(value), style=style)

    table.add_row("Duration", f"{summary.get('duration', 0):.2f}s")
    return table


def create_summary_panel(summary: Dict[str, Any], service: str = "") -> Panel:
    """Wrap the summary table in a titled panel."""
    title = "Notifier Summary"
    if service:
        title = f"{title} ({service})"

    border_style = "green"
    if summary.get("lines_discarded"):
        border_style = "yellow"

    return Panel(create_summary_table(summary), title=title, border_style=border_style)


def print_summary(
    summary: Dict[str, Any],
    service: str = "",
    file: Optional[TextIO] = None,
) -> None:
    """Print a run summary, to stderr unless another text stream is given."""
    console = Console(file=file or sys.stderr, highlight=False)
    console.print(create_summary_panel(summary, service))
