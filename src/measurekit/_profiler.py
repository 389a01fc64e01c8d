"""Checkpoint-based profiler with optional memory tracking."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from beartype import beartype
from loguru import logger

from measurekit._clock import Clock, default_clock
from measurekit._duration import Duration
from measurekit._errors import InvalidSequenceError
from measurekit._memory import current_memory_usage


@dataclass(frozen=True)
class Checkpoint:
    """A named point in a profiler session.

    Attributes:
        name: Label for this checkpoint (not required to be unique)
        duration: Time from session start to this checkpoint
        timestamp: Wall-clock time the checkpoint was recorded
        memory_usage: Memory usage in bytes (None unless tracking memory)
        memory_delta: Change in bytes since the previous checkpoint
            (None unless tracking memory; 0 for the first checkpoint)
    """

    name: str
    duration: Duration
    timestamp: datetime
    memory_usage: int | None = None
    memory_delta: int | None = None


class Profiler:
    """Start/checkpoint/stop profiler measuring everything from one origin.

    Args:
        name: Session display name (default: "Profiler Session")
        track_memory: Record memory usage and deltas per checkpoint (default: False)
        clock: Clock to read (default: default_clock())
        memory_probe: Callable returning memory usage in bytes
            (default: current_memory_usage)

    Example:
        profiler = Profiler.started("Pipeline")
        load()
        profiler.checkpoint("Loaded")
        transform()
        for cp in profiler.stop("Done"):
            print(cp.name, cp.duration)

    Design by Contract:
        - start() while running raises InvalidSequenceError
        - checkpoint()/stop() while idle raise InvalidSequenceError
        - checkpoint durations are non-decreasing within a session
        - stop() appends exactly one checkpoint
        - first checkpoint's memory_delta == 0 when tracking memory
    """

    @beartype
    def __init__(
        self,
        name: str = "Profiler Session",
        track_memory: bool = False,
        clock: Clock | None = None,
        memory_probe: Callable[[], int] | None = None,
    ) -> None:
        self.name = name
        self.track_memory = track_memory
        self._clock: Clock = clock if clock is not None else default_clock()
        self._memory_probe: Callable[[], int] = (
            memory_probe if memory_probe is not None else current_memory_usage
        )
        self._origin: int | None = None
        self._checkpoints: list[Checkpoint] = []
        self._last_memory_usage: int = 0

    @property
    def checkpoints(self) -> list[Checkpoint]:
        """Copy of all checkpoints recorded in the current session."""
        return list(self._checkpoints)

    @property
    def last_checkpoint(self) -> Checkpoint | None:
        return self._checkpoints[-1] if self._checkpoints else None

    @property
    def is_running(self) -> bool:
        return self._origin is not None

    @property
    def elapsed(self) -> Duration | None:
        """Live time since start(), or None when idle. Records nothing."""
        if self._origin is None:
            return None
        return self._since_origin(self._origin)

    @beartype
    def get_checkpoint(self, name: str) -> Checkpoint | None:
        """Return the first checkpoint with the given name, if any."""
        for checkpoint in self._checkpoints:
            if checkpoint.name == name:
                return checkpoint
        return None

    def start(self) -> "Profiler":
        """Begin a new session. Returns self for chaining."""
        if self._origin is not None:
            raise InvalidSequenceError(
                f"Profiler '{self.name}' already started. "
                f"Call reset() to start a new session."
            )
        self._origin = self._clock.now()
        self._checkpoints = []

        if self.track_memory:
            self._last_memory_usage = self._memory_probe()

        logger.debug(f"Profiler '{self.name}' started")
        return self

    @beartype
    def checkpoint(self, name: str) -> Duration:
        """Record a checkpoint and return the time elapsed since start().

        Args:
            name: Label for this checkpoint (e.g., "After Feature Building")

        Raises:
            InvalidSequenceError: If the profiler is not running
        """
        if self._origin is None:
            raise InvalidSequenceError(
                f"Profiler '{self.name}' not started. Call start() first."
            )
        duration = self._since_origin(self._origin)

        memory_usage: int | None = None
        memory_delta: int | None = None
        if self.track_memory:
            memory_usage = self._memory_probe()
            if self._checkpoints:
                memory_delta = memory_usage - self._last_memory_usage
            else:
                memory_delta = 0
            self._last_memory_usage = memory_usage

        self._checkpoints.append(
            Checkpoint(
                name=name,
                duration=duration,
                timestamp=datetime.now(),
                memory_usage=memory_usage,
                memory_delta=memory_delta,
            )
        )
        return duration

    @beartype
    def stop(self, final_name: str = "Final") -> list[Checkpoint]:
        """Record a final checkpoint and end the session.

        Returns:
            All checkpoints of the session, including the final one.

        Raises:
            InvalidSequenceError: If the profiler is not running
        """
        if self._origin is None:
            raise InvalidSequenceError(f"Profiler '{self.name}' not started.")

        self.checkpoint(final_name)
        self._origin = None

        logger.debug(
            f"Profiler '{self.name}' stopped after {self._checkpoints[-1].duration} "
            f"({len(self._checkpoints)} checkpoints)"
        )
        return self.checkpoints

    def reset(self) -> None:
        """Return to idle and discard the session, whatever the current state."""
        self._origin = None
        self._checkpoints = []
        self._last_memory_usage = 0

    def log_summary(self) -> None:
        """Log the recorded checkpoints via loguru."""
        if not self._checkpoints:
            logger.info(f"[PROFILER: {self.name}] No checkpoints yet")
            return

        logger.info(
            f"[PROFILER: {self.name}] {len(self._checkpoints)} checkpoints, "
            f"last at {self._checkpoints[-1].duration}"
        )
        for checkpoint in self._checkpoints:
            line = f"  {checkpoint.name}: {checkpoint.duration}"
            if checkpoint.memory_usage is not None:
                line += f", mem={checkpoint.memory_usage / 1024**2:.2f}MB"
            if checkpoint.memory_delta is not None:
                delta = checkpoint.memory_delta / 1024**2
                sign = "+" if delta >= 0 else ""
                line += f", Δ={sign}{delta:.2f}MB"
            logger.info(line)

    def _since_origin(self, origin: int) -> Duration:
        elapsed_ns = self._clock.now() - origin
        assert elapsed_ns >= 0, (
            f"Elapsed time cannot be negative: {elapsed_ns}ns. "
            f"Clock went backwards or timing bug."
        )
        return Duration(elapsed_ns)

    @classmethod
    @beartype
    def started(
        cls, name: str = "Profiler Session", track_memory: bool = False
    ) -> "Profiler":
        """Construct a profiler and start it immediately."""
        return cls(name=name, track_memory=track_memory).start()

    def __enter__(self) -> "Profiler":
        return self.start()

    def __exit__(self, *args: Any) -> None:
        if self.is_running:
            self.stop()
