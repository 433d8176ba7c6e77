from __future__ import annotations

import time
from typing import Callable, Tuple, TypeVar

T = TypeVar("T")


def time_fn(fn: Callable[[], T]) -> Tuple[float, T]:
    """Run `fn` once and return (elapsed seconds, result)."""
    start = time.perf_counter()
    result = fn()
    return time.perf_counter() - start, result


def readable_time(seconds: float, places: int = 3) -> str:
    """Format a duration with a unit picked by magnitude (μs, ms, s, minutes)."""
    millis = int(seconds * 1000)
    if millis <= 0:
        return f"{seconds * 1e6:.{places}f}μs"
    if millis < 1_000:
        return f"{seconds * 1e3:.{places}f}ms"
    if millis < 120_000:
        return f"{seconds:.{places}f}s"
    return f"{seconds / 60.0:.{places}f} minutes"

