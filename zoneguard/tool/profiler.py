import functools
import os

from line_profiler import LineProfiler

PROFILE_ENV = "ZONEGUARD_PROFILE"


def profiling_enabled() -> bool:
    return os.getenv(PROFILE_ENV, "0") not in ("0", "false", "False", "")


def run_with_line_profiler(func, *args, **kwargs):
    """Call func once under a LineProfiler and print per-line stats."""
    lp = LineProfiler()
    lp.add_function(func)
    lp.enable_by_count()
    try:
        return lp(func)(*args, **kwargs)
    finally:
        lp.disable_by_count()
        lp.print_stats()


def profile_each_line(func):
    """Line-level profiling, only when ZONEGUARD_PROFILE is set.

    The flag is read at call time. ``wrapper.profiled`` always profiles,
    for callers that carry their own switch (EngineSettings.profile).
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not profiling_enabled():
            return func(*args, **kwargs)
        return run_with_line_profiler(func, *args, **kwargs)

    wrapper.profiled = functools.partial(run_with_line_profiler, func)
    return wrapper
