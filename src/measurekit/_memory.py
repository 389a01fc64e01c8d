"""Best-effort process memory probe.

Fallback chain, first available source wins:
1. psutil resident set size of the current process (bytes)
2. tracemalloc's currently traced Python heap (bytes), only while tracing
3. 0

Readings from different sources measure different things and must not be
compared with each other. Deltas are only meaningful within one host and
one source.
"""

import tracemalloc

import psutil
from loguru import logger


def current_memory_usage() -> int:
    """Return current memory usage in bytes, or 0 if no source is available."""
    try:
        return int(psutil.Process().memory_info().rss)
    except (psutil.Error, OSError) as exc:
        logger.debug(f"psutil memory probe unavailable: {exc}")

    if tracemalloc.is_tracing():
        current, _peak = tracemalloc.get_traced_memory()
        return int(current)

    return 0
