"""Deterministic clocks and memory probes for tests.

Timing components take their clock and memory probe through the
constructor, so tests inject scripted ones instead of patching time.
"""

from collections.abc import Iterable

import pytest
from loguru import logger


class ScriptedClock:
    """Clock returning a fixed sequence of nanosecond readings."""

    def __init__(self, readings: Iterable[int]) -> None:
        self._readings = iter(readings)
        self.reads = 0

    def now(self) -> int:
        self.reads += 1
        return next(self._readings)


class TickingClock:
    """Clock advancing by a fixed step on every read."""

    def __init__(self, step: int) -> None:
        self.step = step
        self._current = 0

    def now(self) -> int:
        value = self._current
        self._current += self.step
        return value


class ScriptedMemory:
    """Memory probe returning a fixed sequence of byte counts."""

    def __init__(self, readings: Iterable[int]) -> None:
        self._readings = iter(readings)

    def __call__(self) -> int:
        return next(self._readings)


@pytest.fixture
def scripted_clock():
    return ScriptedClock


@pytest.fixture
def ticking_clock():
    return TickingClock


@pytest.fixture
def scripted_memory():
    return ScriptedMemory


@pytest.fixture
def log_messages():
    """Collect formatted loguru messages emitted during the test."""
    messages: list[str] = []
    sink_id = logger.add(
        lambda message: messages.append(message.rstrip("\n")), format="{message}"
    )
    yield messages
    logger.remove(sink_id)
