"""Conversions between duration representations.

Integers are nanosecond counts and floats are seconds. ``datetime.timedelta``
and ``numpy.timedelta64`` values are converted exactly to nanoseconds, except
sub-nanosecond ``timedelta64`` remainders, which give a float.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import TypeAlias

import numpy as np

DurationLike: TypeAlias = int | float | timedelta | np.timedelta64

NANOS_PER_MICRO = 1_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_SEC = 1_000_000_000


# Nanoseconds per numpy timedelta64 unit; "generic" counts are nanoseconds.
_TIMEDELTA64_NANOS = {
    "W": 7 * 86_400 * NANOS_PER_SEC,
    "D": 86_400 * NANOS_PER_SEC,
    "h": 3_600 * NANOS_PER_SEC,
    "m": 60 * NANOS_PER_SEC,
    "s": NANOS_PER_SEC,
    "ms": NANOS_PER_MILLI,
    "us": NANOS_PER_MICRO,
    "ns": 1,
    "generic": 1,
}
# Sub-nanosecond units, as divisors.
_TIMEDELTA64_SUBNANOS = {"ps": 1_000, "fs": 1_000_000, "as": 1_000_000_000}


def _timedelta_nanos(value: timedelta) -> int:
    return (value.days * 86_400 + value.seconds) * NANOS_PER_SEC + value.microseconds * 1_000


def _timedelta64_nanos(value: np.timedelta64) -> int | float:
    if np.isnat(value):
        raise ValueError("Duration is NaT")
    unit, multiplier = np.datetime_data(value.dtype)
    count = int(value.astype(np.int64)) * multiplier
    if unit in _TIMEDELTA64_NANOS:
        return count * _TIMEDELTA64_NANOS[unit]
    if unit in _TIMEDELTA64_SUBNANOS:
        whole, rest = divmod(count, _TIMEDELTA64_SUBNANOS[unit])
        return whole if rest == 0 else count / _TIMEDELTA64_SUBNANOS[unit]
    raise ValueError(f"Cannot express {value!r} in nanoseconds: unit {unit!r} has no fixed length")


def to_nanos(value: DurationLike) -> int | float:
    """Return *value* as a non-negative nanosecond count.

    Exact inputs give an ``int``. Float seconds give a ``float`` so that
    sub-nanosecond fractions survive.
    """

    nanos: int | float
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("bool is not a duration")
    if isinstance(value, np.timedelta64):
        nanos = _timedelta64_nanos(value)
    elif isinstance(value, timedelta):
        nanos = _timedelta_nanos(value)
    elif isinstance(value, (int, np.integer)):
        nanos = int(value)
    elif isinstance(value, (float, np.floating)):
        if not math.isfinite(value):
            raise ValueError(f"Duration must be finite, got {value!r}")
        nanos = float(value) * NANOS_PER_SEC
        if not math.isfinite(nanos):
            raise ValueError(f"Duration out of range: {value!r} seconds")
    else:
        raise TypeError(f"Unsupported duration type: {type(value).__name__}")
    if nanos < 0:
        raise ValueError(f"Duration must be non-negative, got {value!r}")
    return nanos


def as_fractional_nanos(value: DurationLike) -> float:
    return float(to_nanos(value))


def as_fractional_micros(value: DurationLike) -> float:
    return to_nanos(value) / NANOS_PER_MICRO


def as_fractional_millis(value: DurationLike) -> float:
    return to_nanos(value) / NANOS_PER_MILLI


def as_fractional_secs(value: DurationLike) -> float:
    """Return *value* in seconds as a float."""
    return to_nanos(value) / NANOS_PER_SEC
