"""Fixed-shape year/month report skeletons that aggregation writes into."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Literal

from caretrack.backend.config.reporting_config import ReportingConfiguration

from .buckets import BucketSet, ServiceTotals
from .utils import round_hours

_LOGGER = logging.getLogger(__name__)

Dimension = Literal["localities", "deprivation_categories"]
LOCALITIES: Dimension = "localities"
DEPRIVATION_CATEGORIES: Dimension = "deprivation_categories"
MONTHS = tuple(range(1, 13))


class ScaffoldLookupError(LookupError):
    """Raised when aggregation targets a year or month the scaffold does not hold."""

    def __init__(self, message: str, *, report: str | None = None) -> None:
        super().__init__(message)
        self.report = report


@dataclass(slots=True, kw_only=True)
class Breakdown:
    """Total hours with a service breakdown and one dimensional breakdown."""

    total_hours: float = 0.0
    services: ServiceTotals = field(default_factory=ServiceTotals)
    buckets: BucketSet = field(default_factory=BucketSet)

    def contribute(
        self,
        hours: float,
        label: str,
        service_tags: Iterable[str],
        config: ReportingConfiguration,
    ) -> None:
        tags = tuple(service_tags)
        self.total_hours = round_hours(self.total_hours + hours)
        self.services.add_services(hours, tags, config)
        self.buckets.upsert_and_add(label, hours, tags, config)

    def _totals_dict(self, dimension: Dimension) -> dict[str, Any]:
        return {
            "total_hours": self.total_hours,
            "services": self.services.as_list(),
            dimension: self.buckets.as_list(),
        }


@dataclass(slots=True, kw_only=True)
class CrossSection(Breakdown):
    """Point-in-time totals over the items open today."""

    dimension: Dimension = LOCALITIES

    def as_dict(self) -> dict[str, Any]:
        return self._totals_dict(self.dimension)


@dataclass(slots=True, kw_only=True)
class MonthReport(Breakdown):
    month: int

    def as_dict(self, dimension: Dimension) -> dict[str, Any]:
        return {"month": self.month, **self._totals_dict(dimension)}


@dataclass(slots=True, kw_only=True)
class YearReport(Breakdown):
    year: int
    months: list[MonthReport]

    def month_report(self, month: int) -> MonthReport:
        if month not in MONTHS:
            raise ScaffoldLookupError(f"Month {month} not found in report year {self.year}")
        return self.months[month - 1]

    def as_dict(self, dimension: Dimension) -> dict[str, Any]:
        return {
            "year": self.year,
            **self._totals_dict(dimension),
            "months": [month.as_dict(dimension) for month in self.months],
        }


@dataclass(slots=True, kw_only=True)
class Report:
    """Time-series report covering every month of ``[start_year, end_year]``."""

    years: list[YearReport]
    dimension: Dimension = LOCALITIES

    @property
    def year_range(self) -> range:
        if not self.years:
            return range(0)
        return range(self.years[0].year, self.years[-1].year + 1)

    def covers(self, year: int, month: int) -> bool:
        return year in self.year_range and month in MONTHS

    def locate(self, year: int, month: int) -> tuple[YearReport, MonthReport]:
        """Return the existing year and month entries, never creating new ones."""

        if year not in self.year_range:
            raise ScaffoldLookupError(f"Year {year} not found in report")
        year_report = self.years[year - self.years[0].year]
        return year_report, year_report.month_report(month)

    def as_dict(self) -> dict[str, Any]:
        return {"years": [year.as_dict(self.dimension) for year in self.years]}


def build_empty_year(year: int) -> YearReport:
    return YearReport(year=year, months=[MonthReport(month=month) for month in MONTHS])


def build_empty_report(
    start_year: int, current_year: int, *, dimension: Dimension = LOCALITIES
) -> Report:
    """Return a zeroed report with twelve months for each year in range."""

    if start_year > current_year:
        _LOGGER.debug(
            "Start year %s is after %s; building an empty report", start_year, current_year
        )
    years = [build_empty_year(year) for year in range(start_year, current_year + 1)]
    return Report(years=years, dimension=dimension)


__all__ = [
    "DEPRIVATION_CATEGORIES",
    "LOCALITIES",
    "MONTHS",
    "Breakdown",
    "CrossSection",
    "Dimension",
    "MonthReport",
    "Report",
    "ScaffoldLookupError",
    "YearReport",
    "build_empty_report",
    "build_empty_year",
]
