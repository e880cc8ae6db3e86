"""
Request Pacing.

Supertone allows one synthesis request per interval. The pacer measures
the interval between request *start* times: a slow response does not push
the next request further out, and skipped syllables do not consume a wait.

Clock and sleep are injectable so tests can drive time directly:

    pacer = RequestPacer(4000, clock=fake.now, sleep=fake.sleep)
    pacer.wait()   # first request: no wait
    pacer.wait()   # second request: sleeps until 4s after the first start
"""
from __future__ import annotations

import time
from typing import Callable, Optional

Clock = Callable[[], float]
Sleep = Callable[[float], None]


class RequestPacer:
    """
    Enforces a minimum interval between successive request starts.

    Attributes:
        interval_s: Minimum seconds between request starts.
        last_start: Clock value of the most recent start, or None.
    """

    def __init__(self, interval_ms: float, clock: Clock = time.monotonic, sleep: Sleep = time.sleep):
        self.interval_s = interval_ms / 1000.0
        self._clock = clock
        self._sleep = sleep
        self.last_start: Optional[float] = None

    def sleep_until(self, deadline: float) -> float:
        """
        Block until the clock reaches ``deadline``.

        Returns:
            Seconds slept (0.0 if the deadline already passed).
        """
        remaining = deadline - self._clock()
        if remaining <= 0:
            return 0.0
        self._sleep(remaining)
        return remaining

    def wait(self) -> float:
        """
        Wait for the next request slot and mark it as started.

        Call immediately before issuing a request.

        Returns:
            Seconds waited.
        """
        waited = 0.0
        if self.last_start is not None:
            waited = self.sleep_until(self.last_start + self.interval_s)
        self.last_start = self._clock()
        return waited
