"""Stopwatch timer producing Durations."""

from typing import Any

from beartype import beartype
from loguru import logger

from measurekit._clock import Clock, default_clock
from measurekit._duration import Duration
from measurekit._errors import InvalidSequenceError


class Timer:
    """Start/finish stopwatch measuring elapsed time on a monotonic clock.

    Args:
        clock: Clock to read (default: default_clock())

    Usage:
        timer = Timer.started()
        expensive_operation()
        elapsed = timer.finish()

        with Timer() as timer:
            expensive_operation()
        print(timer.elapsed)

    Design by Contract:
        - start() while running raises InvalidSequenceError
        - finish() while idle raises InvalidSequenceError
        - finish() always returns a non-negative Duration
    """

    @beartype
    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock if clock is not None else default_clock()
        self._origin: int | None = None
        self.elapsed: Duration | None = None

    @property
    def is_running(self) -> bool:
        return self._origin is not None

    def start(self) -> "Timer":
        """Record the clock origin. Returns self for chaining."""
        if self._origin is not None:
            raise InvalidSequenceError(
                "Timer already started. Call finish() before starting again."
            )
        self._origin = self._clock.now()
        return self

    def finish(self) -> Duration:
        """Return the time elapsed since start() and go back to idle."""
        if self._origin is None:
            raise InvalidSequenceError("Timer finished without being started.")
        elapsed_ns = self._clock.now() - self._origin
        self._origin = None

        assert elapsed_ns >= 0, (
            f"Elapsed time cannot be negative: {elapsed_ns}ns. "
            f"Clock went backwards or timing bug."
        )
        self.elapsed = Duration(elapsed_ns)
        return self.elapsed

    @classmethod
    @beartype
    def started(cls, clock: Clock | None = None) -> "Timer":
        """Construct a timer and start it immediately."""
        return cls(clock).start()

    def __enter__(self) -> "Timer":
        return self.start()

    def __exit__(self, *args: Any) -> None:
        elapsed = self.finish()
        logger.debug(f"Timer finished after {elapsed}")
