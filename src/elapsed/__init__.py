"""Measure how long a block of code takes to run."""

from .duration import (
    DurationLike,
    as_fractional_micros,
    as_fractional_millis,
    as_fractional_nanos,
    as_fractional_secs,
    to_nanos,
)
from .format import TimeFormat
from .timing import Timer, measure_time, time_block

__all__ = [
    "__version__",
    "DurationLike",
    "TimeFormat",
    "Timer",
    "as_fractional_micros",
    "as_fractional_millis",
    "as_fractional_nanos",
    "as_fractional_secs",
    "measure_time",
    "time_block",
    "to_nanos",
]

__version__ = "0.1.0"
