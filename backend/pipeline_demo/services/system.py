"""
Pipeline Demo — Process Metrics
================================

What:  Uptime and memory counters for GET /health.
How:   Standard library only: resource (POSIX) for peak RSS, tracemalloc for Python
       heap usage (when tracing is on), gc for the tracked object count.
"""

import gc
import sys
import time
import tracemalloc

from pipeline_demo.schemas.user import MemoryUsage

# POSIX only; peak RSS is reported as 0 where it is missing (Windows)
try:
    import resource
except ImportError:
    resource = None

# Captured when the module is first imported, i.e. at service startup
_start_time = time.monotonic()


def uptime_seconds() -> float:
    return round(time.monotonic() - _start_time, 3)


def memory_usage() -> MemoryUsage:
    """
    Sample the current process memory counters.

    ru_maxrss is reported in kilobytes on Linux and in bytes on macOS;
    the result is always bytes, or 0 without the resource module.
    """
    max_rss = 0
    if resource is not None:
        max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        if sys.platform != "darwin":
            max_rss *= 1024

    if tracemalloc.is_tracing():
        current, peak = tracemalloc.get_traced_memory()
    else:
        current, peak = 0, 0

    return MemoryUsage(
        max_rss=max_rss,
        traced_current=current,
        traced_peak=peak,
        gc_objects=len(gc.get_objects()),
    )
