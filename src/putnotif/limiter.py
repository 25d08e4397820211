"""
Fixed window rate limiting of notification fragments.
"""

import time
from typing import Callable, Optional


class RateLimiter:
    """
    Counts fragment units per time window and decides whether a line passes.

    The window is reset lazily, when a line arrives at least ``window`` whole
    seconds after the current window started. Units of discarded lines still
    count toward the window.
    """

    def __init__(
        self,
        limit: int,
        window: int,
        clock: Callable[[], float] = time.monotonic,
        now: Optional[float] = None,
    ):
        self.limit = limit
        self.window = window
        self.clock = clock
        self.window_start = clock() if now is None else now
        self.count = 0

    @property
    def enabled(self) -> bool:
        return self.limit > 0

    def admit(self, units: int, now: Optional[float] = None) -> bool:
        """
        Account ``units`` fragments and report whether they may be emitted.

        Args:
            units: Fragment count of the line
            now: Monotonic time in seconds, read from the clock when omitted

        Returns:
            bool: True to emit the line, False to discard it
        """
        if now is None:
            now = self.clock()

        if int(now - self.window_start) >= self.window:
            self.count = 0
            self.window_start = now

        self.count += units

        if self.enabled and self.count > self.limit:
            return False
        return True

    def reset(self, now: Optional[float] = None) -> None:
        self.window_start = self.clock() if now is None else now
        self.count = 0
