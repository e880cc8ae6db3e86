"""
Timing Utilities.

A small context manager used to measure request latency and file writes
for log output. Uses time.perf_counter() for sub-millisecond precision.

Example:
    with timeit("synthesis") as t:
        result = client.synthesize(text)
    info(log, "synth_done", seconds=round(t.seconds, 3))
"""
from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Optional


@dataclass
class Timing:
    """What was timed (e.g. "synthesis", "audio_write") and how long it took."""
    name: str
    seconds: float


class timeit:
    """
    Context manager for timing code blocks.

    The timing is recorded even when the block raises, so failed requests
    can still report how long they took.
    """

    def __init__(self, name: str):
        self.name = name
        self._t0: Optional[float] = None
        self.timing: Optional[Timing] = None

    def __enter__(self) -> "timeit":
        self._t0 = perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        elapsed = perf_counter() - (self._t0 or 0.0)
        self.timing = Timing(name=self.name, seconds=elapsed)

    @property
    def seconds(self) -> float:
        """Elapsed seconds, or -1.0 if the block has not finished."""
        return self.timing.seconds if self.timing else -1.0
