"""
Tests for run summary rendering.
"""

import io
import pytest
from rich.panel import Panel
from rich.table import Table
from src.tui.summary import ROWS, create_summary_table, create_summary_panel, print_summary


class TestSummary:
    """Test cases for the summary table."""

    def setup_method(self):
        """Set up test fixtures."""
        self.summary = {
            "duration": 3.25,
            "lines_read": 10,
            "lines_accepted": 8,
            "lines_discarded": 2,
            "empty_lines": 1,
            "fragmented_lines": 3,
            "fragments_discarded": 2,
            "notifications_sent": 12,
            "bytes_read": 2048,
            "bytes_written": 4096,
        }

    def test_table_rows(self):
        """Test one row per counter plus duration."""
        table = create_summary_table(self.summary)
        assert isinstance(table, Table)
        assert table.row_count == len(ROWS) + 1

    def test_panel_title(self):
        """Test the panel title names the service."""
        panel = create_summary_panel(self.summary, "app/log")
        assert isinstance(panel, Panel)
        assert panel.title == "Notifier Summary (app/log)"

    def test_panel_border_reflects_discards(self):
        """Test the border colour when lines were discarded."""
        assert create_summary_panel(self.summary).border_style == "yellow"
        self.summary["lines_discarded"] = 0
        assert create_summary_panel(self.summary).border_style == "green"

    def test_print_summary(self):
        """Test rendering to a text stream."""
        out = io.StringIO()
        print_summary(self.summary, "app/log", file=out)

        rendered = out.getvalue()
        assert "Notifier Summary" in rendered
        assert "Lines Discarded" in rendered
        assert "4096" in rendered
        assert "3.25s" in rendered

    def test_missing_counters_default_to_zero(self):
        """Test rendering a partial summary."""
        out = io.StringIO()
        print_summary({}, file=out)
        assert "Lines Read" in out.getvalue()
