"""
stdout to collectd notifications

This module implements the main loop that reads text lines from standard
input and writes them to standard output as PUTNOTIF notifications.
"""

import argparse
import logging
import sys
import time
from typing import BinaryIO, Callable, Optional

from rich.console import Console
from rich.markup import escape as escape_markup

from .. import __version__
from ..utils.logging import configure_logging
from .config import (
    DEFAULT_MAX_EVENT_ID, DEFAULT_MAX_EVENT_LENGTH, DEFAULT_SERVICE,
    DEFAULT_WRITE_BUFFER, NotifierConfig,
)
from .exceptions import ConfigurationError, IoError
from .limiter import RateLimiter
from .protocol import CorrelationTracker, Line, build_frames, fragments
from .stats import RunStatistics
from .stream import LineReader, ProtocolWriter


class Notifier:
    """
    Converts input lines into rate limited, fragmented PUTNOTIF messages.
    """

    def __init__(
        self,
        config: NotifierConfig,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        error_stream: Optional[BinaryIO] = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.reader = LineReader(input_stream)
        self.writer = ProtocolWriter(output_stream)
        self.diagnostics = ProtocolWriter(error_stream) if error_stream is not None else None
        self.clock = clock
        self.wall_clock = wall_clock
        self.limiter = RateLimiter(config.limit, config.window, clock=clock)
        self.tracker = CorrelationTracker(config.max_event_id)
        self.stats = RunStatistics()
        self.logger = logging.getLogger(__name__)

    def process_line(self, line: Line) -> int:
        """
        Rate limit one line and emit its notifications.

        Args:
            line: Line read from the input stream

        Returns:
            int: Number of notifications written, 0 for a discarded line

        Raises:
            WriteError: If a notification cannot be written
        """
        self.stats.record_line(line)
        line_fragments = fragments(line, self.config.max_event_length)
        total = len(line_fragments)

        if not self.limiter.admit(total, self.clock()):
            self.stats.record_discarded(total)
            self._report_discard(line)
            return 0

        self.stats.record_accepted(total)
        frames = build_frames(
            line,
            line_fragments,
            self.config.hostname,
            int(self.wall_clock()),
            self.config.plugin,
            self.config.ctype,
            self.tracker.event_id,
        )

        for frame in frames:
            size = self.writer.write(frame)
            self.stats.record_notification(size)

        if total > 1:
            self.tracker.advance()

        return len(frames)

    def _report_discard(self, line: Line) -> None:
        if self.config.verbose and self.diagnostics is not None:
            self.diagnostics.write_raw(
                b"DISCARD:%d/%d:%s" % (self.limiter.count, self.config.limit, line.raw)
            )

    def run(self) -> RunStatistics:
        """
        Process lines until the input stream ends.

        Returns:
            RunStatistics: Counters of the finished run

        Raises:
            IoError: If reading or writing fails
        """
        self.logger.info("Starting notifier: %r", self.config)
        self.limiter.reset(self.clock())
        self.tracker.reset()

        try:
            while True:
                line = self.reader.read_line()
                if line is None:
                    self.logger.info("End of input stream")
                    return self.stats
                self.process_line(line)
        except IoError as e:
            self.logger.error(str(e))
            raise
        finally:
            self.stats.finish()


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="stdout2notif",
        description="stdout to collectd notifications",
    )
    parser.add_argument("--service", "-s", default=DEFAULT_SERVICE,
                        help="collectd service: <plugin>/<type>")
    parser.add_argument("--hostname", "-H", default="", help="system hostname")
    parser.add_argument("--limit", "-l", type=int, default=0, help="message rate limit")
    parser.add_argument("--window", "-w", type=int, default=1, help="message rate window")
    parser.add_argument("--max-event-length", "-M", type=int, default=DEFAULT_MAX_EVENT_LENGTH,
                        help="max message fragment length")
    parser.add_argument("--max-event-id", "-I", type=int, default=DEFAULT_MAX_EVENT_ID,
                        help="max message fragment header id")
    parser.add_argument("--write-buffer", "-W", default=DEFAULT_WRITE_BUFFER,
                        help="behaviour if write buffer is full")
    parser.add_argument("--verbose", "-v", action="store_true", help="verbose mode")
    parser.add_argument("--debug", action="store_true",
                        help="log notifier activity to stderr")
    parser.add_argument("--summary", action="store_true",
                        help="print a run summary to stderr at end of input")
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    """Main entry point for the notifier."""
    args = build_parser().parse_args(argv)
    console = Console(stderr=True, highlight=False)

    try:
        config = NotifierConfig.from_args(args)
    except ConfigurationError as e:
        console.print(f"[red]{escape_markup(str(e))}[/red]")
        return 1

    configure_logging(config.debug)

    notifier = Notifier(
        config,
        sys.stdin.buffer,
        sys.stdout.buffer,
        sys.stderr.buffer,
    )

    try:
        stats = notifier.run()
    except IoError:
        # Already logged by the notifier
        return 1
    except KeyboardInterrupt:
        return 1

    if config.summary:
        from ..tui.summary import print_summary
        print_summary(stats.get_summary(), config.service)

    return 0

