"""Statistical micro-benchmark runner."""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from beartype import beartype
from loguru import logger

from measurekit._clock import Clock, default_clock
from measurekit._duration import Duration
from measurekit._errors import EmptyInputError
from measurekit._timer import Timer


@dataclass(frozen=True)
class BenchmarkResult:
    """Measurements and summary statistics of one benchmark run.

    Attributes:
        name: Display name of the benchmark
        iterations: Number of timed iterations
        warmup_iterations: Number of untimed warmup iterations
        measurements: One Duration per timed iteration, in order
        min: Fastest iteration
        max: Slowest iteration
        average: total // iterations (integer nanoseconds, truncated)
        total: Exact sum of all measurements
    """

    name: str
    iterations: int
    warmup_iterations: int
    measurements: tuple[Duration, ...]
    min: Duration
    max: Duration
    average: Duration
    total: Duration

    def log_summary(self) -> None:
        """Log a formatted summary table via loguru."""
        logger.info("")
        logger.info("=" * 90)
        logger.info(f"{self.name:^90}")
        logger.info("=" * 90)
        logger.info(
            f"{'Iterations':>12} {'Warmup':>8} {'Min':>16} {'Max':>16} "
            f"{'Average':>16} {'Total':>16}"
        )
        logger.info("-" * 90)
        logger.info(
            f"{self.iterations:>12} {self.warmup_iterations:>8} "
            f"{self.min.to_string('Condensed'):>16} "
            f"{self.max.to_string('Condensed'):>16} "
            f"{self.average.to_string('Condensed'):>16} "
            f"{self.total.to_string('Condensed'):>16}"
        )
        logger.info("=" * 90)
        logger.info("")


@beartype
def calculate_statistics(
    measurements: Sequence[Duration],
    name: str,
    iterations: int,
    warmup_iterations: int,
) -> BenchmarkResult:
    """Reduce per-iteration measurements into a BenchmarkResult.

    Args:
        measurements: Timed iterations, in order
        name: Benchmark display name
        iterations: Configured iteration count
        warmup_iterations: Configured warmup count

    Raises:
        EmptyInputError: If measurements is empty
    """
    if not measurements:
        raise EmptyInputError(
            f"No measurements to calculate statistics from (benchmark '{name}')"
        )

    nanoseconds = [m.nanoseconds for m in measurements]
    total_ns = sum(nanoseconds)

    return BenchmarkResult(
        name=name,
        iterations=iterations,
        warmup_iterations=warmup_iterations,
        measurements=tuple(measurements),
        min=Duration(min(nanoseconds)),
        max=Duration(max(nanoseconds)),
        average=Duration(total_ns // len(nanoseconds)),
        total=Duration(total_ns),
    )


class BenchmarkRunner:
    """Repeatedly invokes a function and summarizes its timings.

    Args:
        iterations: Timed iterations (MUST be >= 0, default: 1)
        warmup_iterations: Untimed iterations run first (MUST be >= 0, default: 0)
        name: Display name (default: "Unnamed Benchmark")
        clock: Clock for the per-iteration timers (default: default_clock())

    Example:
        runner = BenchmarkRunner(iterations=100, warmup_iterations=10, name="sort")
        result = runner.run(lambda: sorted(data))
        print(result.average)

    Design by Contract:
        - len(result.measurements) == iterations
        - fn is called exactly iterations + warmup_iterations times
        - min <= average <= max
        - exceptions from fn propagate; no partial result is returned
    """

    @beartype
    def __init__(
        self,
        iterations: int = 1,
        warmup_iterations: int = 0,
        name: str = "Unnamed Benchmark",
        clock: Clock | None = None,
    ) -> None:
        assert iterations >= 0, f"Iterations must be non-negative: {iterations}"
        assert warmup_iterations >= 0, (
            f"Warmup iterations must be non-negative: {warmup_iterations}"
        )
        self.iterations = iterations
        self.warmup_iterations = warmup_iterations
        self.name = name
        self._clock: Clock = clock if clock is not None else default_clock()

    @beartype
    def run(self, fn: Callable[[], Any]) -> BenchmarkResult:
        """Benchmark a synchronous function."""
        logger.debug(
            f"Benchmark '{self.name}': {self.warmup_iterations} warmup, "
            f"{self.iterations} timed iterations"
        )
        for _ in range(self.warmup_iterations):
            fn()

        measurements: list[Duration] = []
        for _ in range(self.iterations):
            timer = Timer.started(self._clock)
            fn()
            measurements.append(timer.finish())

        return self._summarize(measurements)

    @beartype
    async def run_async(self, fn: Callable[[], Awaitable[Any]]) -> BenchmarkResult:
        """Benchmark an async function, awaiting every call before the next."""
        logger.debug(
            f"Benchmark '{self.name}' (async): {self.warmup_iterations} warmup, "
            f"{self.iterations} timed iterations"
        )
        for _ in range(self.warmup_iterations):
            await fn()

        measurements: list[Duration] = []
        for _ in range(self.iterations):
            timer = Timer.started(self._clock)
            await fn()
            measurements.append(timer.finish())

        return self._summarize(measurements)

    def _summarize(self, measurements: list[Duration]) -> BenchmarkResult:
        result = calculate_statistics(
            measurements, self.name, self.iterations, self.warmup_iterations
        )
        logger.debug(f"Benchmark '{self.name}' finished: average {result.average}")
        return result
