"""
Run statistics for the notification loop.

This module keeps counters of everything the loop did with its input so a
summary can be shown when the input stream ends.
"""

import time
from typing import Any, Dict, Optional

from .protocol import Line


class RunStatistics:
    """
    Records what happened to each input line during one run.
    """

    def __init__(self, start_time: Optional[float] = None):
        self.start_time = time.time() if start_time is None else start_time
        self.end_time: Optional[float] = None
        self.lines_read = 0
        self.lines_accepted = 0
        self.lines_discarded = 0
        self.empty_lines = 0
        self.fragmented_lines = 0
        self.fragments_discarded = 0
        self.notifications_sent = 0
        self.bytes_read = 0
        self.bytes_written = 0

    def record_line(self, line: Line) -> None:
        """
        Record a line read from the input stream.

        Args:
            line: The line as read, before rate limiting
        """
        self.lines_read += 1
        self.bytes_read += len(line.raw)
        if line.length == 0:
            self.empty_lines += 1

    def record_accepted(self, total: int) -> None:
        """Record a line that passed the rate limiter with ``total`` fragments."""
        self.lines_accepted += 1
        if total > 1:
            self.fragmented_lines += 1

    def record_discarded(self, total: int) -> None:
        """Record a line dropped by the rate limiter."""
        self.lines_discarded += 1
        self.fragments_discarded += total

    def record_notification(self, size: int) -> None:
        self.notifications_sent += 1
        self.bytes_written += size

    def finish(self) -> None:
        self.end_time = time.time()

    @property
    def duration(self) -> float:
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    def get_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the current run.

        Returns:
            Dict containing run statistics
        """
        return {
            "duration": self.duration,
            "lines_read": self.lines_read,
            "lines_accepted": self.lines_accepted,
            "lines_discarded": self.lines_discarded,
            "empty_lines": self.empty_lines,
            "fragmented_lines": self.fragmented_lines,
            "fragments_discarded": self.fragments_discarded,
            "notifications_sent": self.notifications_sent,
            "bytes_read": self.bytes_read,
            "bytes_written": self.bytes_written,
        }
