"""Unit tests for splitting weekly rates across calendar months."""

from __future__ import annotations

from datetime import date

import pytest

from caretrack.backend.app.services.calculators import MonthSlice, prorate


def test_interval_inside_one_month_counts_both_end_days() -> None:
    slices = prorate(date(2025, 1, 5), date(2025, 1, 12), 14)

    assert slices == [MonthSlice(2025, 1, pytest.approx(16.0))]


def test_interval_crossing_a_month_boundary() -> None:
    slices = prorate(date(2025, 1, 28), date(2025, 2, 3), 7)

    assert [(s.year, s.month) for s in slices] == [(2025, 1), (2025, 2)]
    assert slices[0].hours == pytest.approx(4.0)
    assert slices[1].hours == pytest.approx(2.0)


def test_intermediate_months_count_in_full() -> None:
    slices = prorate(date(2025, 3, 31), date(2025, 6, 1), 7)

    assert [(s.month, s.hours) for s in slices] == [
        (3, pytest.approx(1.0)),
        (4, pytest.approx(30.0)),
        (5, pytest.approx(31.0)),
        (6, pytest.approx(0.0)),
    ]


@pytest.mark.parametrize(("year", "february_days"), [(2024, 29), (2023, 28), (2000, 29), (2100, 28)])
def test_february_uses_leap_year_length(year: int, february_days: int) -> None:
    slices = prorate(date(year, 2, 1), date(year, 3, 1), 7)

    assert slices[0] == MonthSlice(year, 2, pytest.approx(float(february_days)))


def test_interval_rolls_over_into_next_year() -> None:
    slices = prorate(date(2024, 12, 30), date(2025, 1, 2), 7)

    assert slices == [
        MonthSlice(2024, 12, pytest.approx(2.0)),
        MonthSlice(2025, 1, pytest.approx(1.0)),
    ]


def test_whole_weeks_are_conserved_across_months() -> None:
    # 2025-01-20 to 2025-03-03 is exactly six weeks.
    slices = prorate(date(2025, 1, 20), date(2025, 3, 3), 10)

    assert len(slices) == 3
    assert sum(s.hours for s in slices) == pytest.approx(60.0, abs=0.01)


def test_zero_length_interval_yields_one_day() -> None:
    slices = prorate(date(2025, 4, 9), date(2025, 4, 9), 7)

    assert slices == [MonthSlice(2025, 4, pytest.approx(1.0))]


def test_zero_rate_still_emits_every_month() -> None:
    slices = prorate(date(2025, 1, 15), date(2025, 3, 10), 0)

    assert [(s.month, s.hours) for s in slices] == [(1, 0.0), (2, 0.0), (3, 0.0)]


def test_reversed_interval_is_rejected() -> None:
    with pytest.raises(ValueError):
        prorate(date(2025, 2, 1), date(2025, 1, 31), 7)
