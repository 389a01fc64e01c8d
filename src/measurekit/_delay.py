"""Async delay driven by human-readable duration strings."""

import asyncio
import math
import re
import time

from beartype import beartype
from humanfriendly import InvalidTimespan, parse_timespan

from measurekit._duration import NS_PER_MILLISECOND, NS_PER_SECOND, Duration
from measurekit._errors import InvalidDurationError

_BARE_NUMBER = re.compile(r"^\s*(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$")
_LEADING_DOT = re.compile(r"^\s*\.(?=\d)")


@beartype
def parse_duration(text: str) -> Duration:
    """Parse "100ms", "1.5s", ".5s", "1 second" or a bare number of milliseconds.

    Bare numbers may be any non-negative float literal ("50", ".5", "1e3").

    Raises:
        InvalidDurationError: If the text is not a non-negative duration
    """
    if _BARE_NUMBER.match(text):
        milliseconds = float(text)
        if not math.isfinite(milliseconds):
            raise InvalidDurationError(f"Duration out of range: {text!r}")
        return Duration(round(milliseconds * NS_PER_MILLISECOND))

    try:
        seconds = parse_timespan(_LEADING_DOT.sub("0.", text).strip())
    except InvalidTimespan as exc:
        raise InvalidDurationError(f"Cannot parse duration {text!r}: {exc}") from exc

    if seconds < 0:
        raise InvalidDurationError(f"Duration must be non-negative: {text!r}")
    return Duration(round(seconds * NS_PER_SECOND))


@beartype
async def delay(text: str) -> None:
    """Sleep for the parsed duration; never returns early.

    Raises:
        InvalidDurationError: If the text is not a non-negative duration
    """
    duration = parse_duration(text)
    deadline = time.perf_counter_ns() + duration.nanoseconds

    remaining = duration.nanoseconds
    while remaining > 0:
        await asyncio.sleep(remaining / NS_PER_SECOND)
        remaining = deadline - time.perf_counter_ns()
