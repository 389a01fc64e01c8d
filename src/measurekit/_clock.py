"""Monotonic clock sources.

Every timing component reads time through a Clock so the clock source is
chosen once, at construction, instead of being probed on every read.
"""

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of monotonic timestamps in integer nanoseconds."""

    def now(self) -> int: ...


class PerfCounterClock:
    """High-resolution clock backed by time.perf_counter_ns()."""

    def now(self) -> int:
        return time.perf_counter_ns()


class MonotonicMillisClock:
    """Fallback clock with millisecond resolution.

    Reads time.monotonic() as fractional milliseconds and converts to
    nanoseconds by multiplying by 1e6 and rounding.
    """

    def now(self) -> int:
        milliseconds = time.monotonic() * 1000
        return round(milliseconds * 1e6)


def default_clock() -> Clock:
    """Return the best clock available on this interpreter."""
    if hasattr(time, "perf_counter_ns"):
        return PerfCounterClock()
    return MonotonicMillisClock()
