"""Timing utilities."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from types import TracebackType
from typing import TypeVar

from .duration import NANOS_PER_SEC
from .format import TimeFormat

T = TypeVar("T")


def measure_time(block: Callable[[], T]) -> tuple[str, T]:
    """Run *block* once and return ``(formatted_elapsed, result)``.

    The elapsed time is read from the monotonic performance counter around
    the call. Exceptions raised by *block* propagate unchanged.
    """

    start = time.perf_counter_ns()
    result = block()
    elapsed_ns = time.perf_counter_ns() - start
    return str(TimeFormat(elapsed_ns)), result


@dataclass
class Timer:
    """Context manager recording elapsed nanoseconds."""

    start_ns: int = 0
    elapsed_ns: int = 0

    def __enter__(self) -> Timer:
        self.start_ns = time.perf_counter_ns()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.elapsed_ns = time.perf_counter_ns() - self.start_ns

    @property
    def elapsed(self) -> float:
        """Elapsed time in seconds."""
        return self.elapsed_ns / NANOS_PER_SEC

    def format(self, precision: int = 2) -> str:
        return TimeFormat(self.elapsed_ns, precision=precision).render()

    def __str__(self) -> str:
        return self.format()


@contextmanager
def time_block() -> Iterator[Timer]:
    """Yield a :class:`Timer` recording time spent inside the block."""
    with Timer() as t:
        yield t
