"""measurekit: Nanosecond durations, timers, benchmarks and checkpoint profiling.

Provides:
- Duration: Immutable nanosecond-precision elapsed time with Human, Condensed
  and Expressive rendering
- Timer: Start/finish stopwatch (also a context manager)
- BenchmarkRunner: Repeated timing of sync or async functions with min/max/average/total
- Profiler: Start/checkpoint/stop session with optional memory deltas
- delay: Async sleep driven by strings such as "100ms" or "1.5s"

Usage:
    from measurekit import BenchmarkRunner, Profiler

    profiler = Profiler.started("Pipeline", track_memory=True)
    load()
    profiler.checkpoint("Loaded")
    profiler.stop("Done")
    profiler.log_summary()

    result = BenchmarkRunner(iterations=100, warmup_iterations=5).run(work)
    result.log_summary()
"""

from measurekit._benchmark import BenchmarkResult, BenchmarkRunner, calculate_statistics
from measurekit._clock import Clock, MonotonicMillisClock, PerfCounterClock, default_clock
from measurekit._delay import delay, parse_duration
from measurekit._duration import Duration, TimeFormat
from measurekit._errors import (
    EmptyInputError,
    InvalidDurationError,
    InvalidSequenceError,
    MeasurementError,
)
from measurekit._memory import current_memory_usage
from measurekit._profiler import Checkpoint, Profiler
from measurekit._timer import Timer

__all__ = [
    "BenchmarkResult",
    "BenchmarkRunner",
    "Checkpoint",
    "Clock",
    "Duration",
    "EmptyInputError",
    "InvalidDurationError",
    "InvalidSequenceError",
    "MeasurementError",
    "MonotonicMillisClock",
    "PerfCounterClock",
    "Profiler",
    "TimeFormat",
    "Timer",
    "calculate_statistics",
    "current_memory_usage",
    "default_clock",
    "delay",
    "parse_duration",
]

__version__ = "0.1.0"
