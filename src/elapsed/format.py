"""Human-readable rendering of durations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_EVEN, Decimal, localcontext

from .duration import (
    NANOS_PER_MICRO,
    NANOS_PER_MILLI,
    NANOS_PER_SEC,
    DurationLike,
    to_nanos,
)

# Largest unit first; the first unit whose scale fits the value wins.
_UNITS: tuple[tuple[str, int], ...] = (
    ("s", NANOS_PER_SEC),
    ("ms", NANOS_PER_MILLI),
    ("μs", NANOS_PER_MICRO),
    ("ns", 1),
)

_FORMAT_SPEC = re.compile(r"\.(\d+)")


def _select_unit(nanos: int | float) -> tuple[str, int]:
    for unit, scale in _UNITS:
        if nanos >= scale:
            return unit, scale
    return _UNITS[-1]


def _check_precision(precision: int) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ValueError(f"precision must be a non-negative int, got {precision!r}")
    return precision


@dataclass(frozen=True)
class TimeFormat:
    """Display wrapper scaling a duration to ``ns``, ``μs``, ``ms`` or ``s``.

    The unit is the largest one in which the value is at least 1, chosen on
    the unrounded value. The magnitude keeps ``precision`` fractional digits,
    rounded half-to-even on its exact decimal expansion, so
    ``TimeFormat(227_810)`` renders as ``227.81 μs`` and
    ``f"{TimeFormat(1.5):.3}"`` as ``1.500 s``.
    """

    value: DurationLike
    precision: int = 2
    nanos: int | float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_precision(self.precision)
        object.__setattr__(self, "nanos", to_nanos(self.value))

    @property
    def unit(self) -> str:
        return _select_unit(self.nanos)[0]

    def scaled(self, precision: int | None = None) -> Decimal:
        """Return the magnitude in :attr:`unit`, rounded to *precision* digits."""

        digits = self.precision if precision is None else _check_precision(precision)
        _, scale = _select_unit(self.nanos)
        value = Decimal(self.nanos)
        # Enough digits to divide by a power of ten and quantize without loss.
        with localcontext() as ctx:
            ctx.prec = len(value.as_tuple().digits) + max(value.adjusted(), 0) + digits + 2
            ctx.Emin, ctx.Emax = MIN_EMIN, MAX_EMAX
            exact = value / scale
            return exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_EVEN)

    @property
    def magnitude(self) -> Decimal:
        return self.scaled()

    def render(self, precision: int | None = None) -> str:
        return f"{self.scaled(precision):f} {self.unit}"

    def __str__(self) -> str:
        return self.render()

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return self.render()
        match = _FORMAT_SPEC.fullmatch(format_spec)
        if match is None:
            raise ValueError(f"Invalid format spec for TimeFormat: {format_spec!r}")
        return self.render(int(match.group(1)))
