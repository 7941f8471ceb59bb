"""Split a weekly-hours rate across the calendar months an interval touches."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .utils import days_in_month, next_month

DAYS_PER_WEEK = 7


@dataclass(frozen=True, slots=True)
class MonthSlice:
    """Hours attributable to a single calendar month."""

    year: int
    month: int
    hours: float


def prorate(start: date, end: date, weekly_rate: float) -> list[MonthSlice]:
    """Return the hours ``weekly_rate`` accrues in each month from ``start`` to ``end``.

    The start month counts every day from ``start`` to the end of the month and
    intermediate months count in full. When the interval crosses a month
    boundary the final month counts ``end.day - 1`` days; an interval inside a
    single month counts ``end.day - start.day + 1`` days. Slices are emitted for
    zero rates too so that buckets touched by the item still appear.
    """

    if start > end:
        raise ValueError(f"Interval start {start} is after its end {end}")

    if (start.year, start.month) == (end.year, end.month):
        days = end.day - start.day + 1
        return [MonthSlice(start.year, start.month, weekly_rate * days / DAYS_PER_WEEK)]

    slices: list[MonthSlice] = []
    year, month, day = start.year, start.month, start.day
    while (year, month) < (end.year, end.month):
        days = days_in_month(year, month) - day + 1
        slices.append(MonthSlice(year, month, weekly_rate * days / DAYS_PER_WEEK))
        day = 1
        year, month = next_month(year, month)

    slices.append(MonthSlice(year, month, weekly_rate * (end.day - 1) / DAYS_PER_WEEK))
    return slices


__all__ = ["DAYS_PER_WEEK", "MonthSlice", "prorate"]
