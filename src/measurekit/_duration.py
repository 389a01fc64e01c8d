"""Nanosecond-precision duration value type.

Design by Contract:
- nanoseconds MUST be a non-negative int (crash if negative)
- Durations are immutable; arithmetic returns new instances
- Subtraction clamps at zero instead of failing

Numeric coercion:
    int(duration) is exact. float(duration) loses precision once the count
    passes 2**53 ns (roughly 104 days).
"""

import numbers
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from beartype import beartype

TimeFormat = Literal["Human", "Condensed", "Expressive"]

_TIME_FORMATS = ("Human", "Condensed", "Expressive")

NS_PER_MILLISECOND = 1_000_000
NS_PER_SECOND = 1_000_000_000
NS_PER_MINUTE = 60 * NS_PER_SECOND
NS_PER_HOUR = 60 * NS_PER_MINUTE

# Anchor used by to_date(): day zero of month zero of year 1900, local time.
_DATE_EPOCH = datetime(1899, 12, 31)


class Duration:
    """Immutable elapsed-time value held as an integer nanosecond count.

    Args:
        nanoseconds: Elapsed time in nanoseconds (MUST be >= 0)

    Attributes:
        nanoseconds: The canonical nanosecond count
        hours: Whole hours (unbounded)
        minutes: Whole minutes after the hours (0-59)
        seconds: Whole seconds after the minutes (0-59)
        milliseconds: Remaining milliseconds, fractional (0 <= ms < 1000)

    Example:
        d = Duration(65_500_000_000)
        str(d)                    # "1min 5.500sec"
        d.to_string("Condensed")  # "01:05.500"
    """

    __slots__ = (
        "_nanoseconds",
        "_hours",
        "_minutes",
        "_seconds",
        "_milliseconds",
    )

    @beartype
    def __init__(self, nanoseconds: int) -> None:
        assert not isinstance(nanoseconds, bool), (
            f"Duration needs a nanosecond count, got {nanoseconds!r}"
        )
        assert nanoseconds >= 0, (
            f"Duration cannot be negative: {nanoseconds}ns. "
            f"Clamp before constructing."
        )
        nanoseconds = int(nanoseconds)
        self._nanoseconds = nanoseconds

        hours, remainder = divmod(nanoseconds, NS_PER_HOUR)
        minutes, remainder = divmod(remainder, NS_PER_MINUTE)
        seconds, remainder = divmod(remainder, NS_PER_SECOND)

        self._hours: int = hours
        self._minutes: int = minutes
        self._seconds: int = seconds
        self._milliseconds: float = remainder / NS_PER_MILLISECOND

    @property
    def nanoseconds(self) -> int:
        return self._nanoseconds

    @property
    def hours(self) -> int:
        return self._hours

    @property
    def minutes(self) -> int:
        return self._minutes

    @property
    def seconds(self) -> int:
        return self._seconds

    @property
    def milliseconds(self) -> float:
        return self._milliseconds

    # -- arithmetic ---------------------------------------------------------

    @beartype
    def add(self, other: "Duration") -> "Duration":
        """Return the sum of both durations."""
        return Duration(self._nanoseconds + other._nanoseconds)

    @beartype
    def subtract(self, other: "Duration") -> "Duration":
        """Return the difference of both durations, clamped at zero."""
        return Duration(max(0, self._nanoseconds - other._nanoseconds))

    def __add__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.subtract(other)

    # -- comparison ---------------------------------------------------------

    @beartype
    def equals(self, other: "Duration") -> bool:
        return self._nanoseconds == other._nanoseconds

    @beartype
    def less_than(self, other: "Duration") -> bool:
        return self._nanoseconds < other._nanoseconds

    @beartype
    def greater_than(self, other: "Duration") -> bool:
        return self._nanoseconds > other._nanoseconds

    @beartype
    def less_than_or_equal(self, other: "Duration") -> bool:
        return self._nanoseconds <= other._nanoseconds

    @beartype
    def greater_than_or_equal(self, other: "Duration") -> bool:
        return self._nanoseconds >= other._nanoseconds

    @staticmethod
    def _comparable(other: object) -> int | float | None:
        # Plain numbers compare as nanosecond counts.
        if isinstance(other, Duration):
            return other._nanoseconds
        if isinstance(other, numbers.Real):
            return other  # type: ignore[return-value]
        return None

    def __eq__(self, other: object) -> bool:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._nanoseconds == value

    def __lt__(self, other: object) -> bool:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._nanoseconds < value

    def __le__(self, other: object) -> bool:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._nanoseconds <= value

    def __gt__(self, other: object) -> bool:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._nanoseconds > value

    def __ge__(self, other: object) -> bool:
        value = self._comparable(other)
        if value is None:
            return NotImplemented
        return self._nanoseconds >= value

    def __hash__(self) -> int:
        return hash(self._nanoseconds)

    # -- coercion -----------------------------------------------------------

    def __int__(self) -> int:
        return self._nanoseconds

    def __float__(self) -> float:
        return float(self._nanoseconds)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Duration({self._nanoseconds})"

    def __format__(self, format_spec: str) -> str:
        if format_spec in _TIME_FORMATS:
            return self.to_string(format_spec)  # type: ignore[arg-type]
        return format(self.to_string(), format_spec)

    # -- rendering ----------------------------------------------------------

    @beartype
    def to_string(self, fmt: TimeFormat = "Human") -> str:
        """Render the duration.

        Only units at or below the largest nonzero unit among hours, minutes
        and seconds are shown. Below one second the milliseconds are shown
        alone with two decimals; otherwise they are a whole number padded to
        three digits.

        Args:
            fmt: One of "Human", "Condensed", "Expressive"

        Returns:
            "1hrs 1min 5.500sec", "01:01:05.500" or
            "1 Hours, 1 Minutes, and 5.500 Seconds" respectively.
        """
        if fmt == "Condensed":
            return self._condensed()
        if fmt == "Expressive":
            return self._expressive()
        return self._human()

    def to_date(self) -> datetime:
        """Project the duration onto a naive local time of day.

        Hours are not wrapped at 24: anything past 23 rolls the date forward
        from the 1899-12-31 anchor.
        """
        return _DATE_EPOCH + timedelta(
            hours=self._hours,
            minutes=self._minutes,
            seconds=self._seconds,
            milliseconds=int(self._milliseconds),
        )

    def _rounded_millis(self, places: int) -> Decimal:
        # Exact binary value of the float, ties away from zero (JS toFixed).
        return Decimal(self._milliseconds).quantize(
            Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP
        )

    def _whole_millis(self) -> str:
        # 999.5ms and above renders "1000".
        return f"{int(self._rounded_millis(0)):03d}"

    def _fractional_millis(self) -> str:
        return str(self._rounded_millis(2))

    def _condensed(self) -> str:
        millis = self._whole_millis()
        if self._hours != 0:
            return f"{self._hours:02d}:{self._minutes:02d}:{self._seconds:02d}.{millis}"
        if self._minutes != 0:
            return f"{self._minutes:02d}:{self._seconds:02d}.{millis}"
        if self._seconds != 0:
            return f"{self._seconds}.{millis}"
        return self._fractional_millis()

    def _human(self) -> str:
        millis = self._whole_millis()
        if self._hours != 0:
            return f"{self._hours}hrs {self._minutes}min {self._seconds}.{millis}sec"
        if self._minutes != 0:
            return f"{self._minutes}min {self._seconds}.{millis}sec"
        if self._seconds != 0:
            return f"{self._seconds}.{millis}sec"
        return f"{self._fractional_millis()}ms"

    def _expressive(self) -> str:
        millis = self._whole_millis()
        if self._hours != 0:
            return (
                f"{self._hours} Hours, {self._minutes} Minutes, "
                f"and {self._seconds}.{millis} Seconds"
            )
        if self._minutes != 0:
            return f"{self._minutes} Minutes, and {self._seconds}.{millis} Seconds"
        if self._seconds != 0:
            return f"{self._seconds}.{millis} Seconds"
        return f"{self._fractional_millis()} Milliseconds"
