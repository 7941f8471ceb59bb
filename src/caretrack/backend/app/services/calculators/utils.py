"""Numeric and calendar helpers shared by the report calculators."""

from __future__ import annotations

import calendar
from decimal import ROUND_HALF_UP, Decimal

_HOURS_QUANTUM = Decimal("0.01")


def round_hours(value: float) -> float:
    """Round ``value`` to two decimals, halves away from zero.

    Running totals are rounded after every addition rather than once at the
    end, so the result depends on the order contributions arrive in.
    """

    quantized = Decimal(repr(value)).quantize(_HOURS_QUANTUM, rounding=ROUND_HALF_UP)
    return float(quantized)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year`` (leap years included)."""

    return calendar.monthrange(year, month)[1]


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return the ``(year, month)`` immediately after the given one."""

    if month == 12:
        return year + 1, 1
    return year, month + 1
