"""Report facade binding the aggregators to a data-access collaborator.

Each public method fetches the items its report family needs, builds a fresh
scaffold, and runs the matching aggregator. "Today" is read from the clock once
per call so that a single report never straddles two dates. Optional profiling
hooks record how long fetching and aggregating took.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import date
from time import perf_counter

from caretrack.backend.app.models.items import TimeBoundedItem
from caretrack.backend.config.reporting_config import (
    ReportingConfiguration,
    load_reporting_configuration,
)

from .attendance import (
    AttendanceAllowanceCrossSection,
    AttendanceAllowanceReport,
    aggregate_attendance_allowance,
    aggregate_attendance_allowance_cross_section,
    aggregate_coordinator_attendance_allowance,
    build_empty_attendance_allowance_report,
)
from .calculators import (
    DEPRIVATION_CATEGORIES,
    LOCALITIES,
    CrossSection,
    Report,
    ScaffoldLookupError,
    build_empty_report,
)
from .calculators.scaffold import Dimension
from .cross_section import aggregate_cross_section
from .interval_report import (
    Classifier,
    aggregate_interval_report,
    classify_deprivation,
    classify_locality,
)
from .item_sources import ItemSource

_LOGGER = logging.getLogger(__name__)

PROFILE_ENV = "CARETRACK_PROFILE_REPORTS"


def _profiling_enabled() -> bool:
    """Return ``True`` when report profiling should be captured."""

    flag = os.getenv(PROFILE_ENV, "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None) -> Iterator[None]:
    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


class ReportService:
    """Generate every analytics report from an :class:`ItemSource`."""

    def __init__(
        self,
        source: ItemSource,
        *,
        config: ReportingConfiguration | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._source = source
        self._config = config or load_reporting_configuration()
        self._clock = clock or date.today

    @property
    def config(self) -> ReportingConfiguration:
        return self._config

    @contextmanager
    def _generating(self, report_name: str) -> Iterator[dict[str, float] | None]:
        timings: dict[str, float] | None = {} if _profiling_enabled() else None
        try:
            yield timings
        except Exception as error:
            if isinstance(error, ScaffoldLookupError) and error.report is None:
                error.report = report_name
            _LOGGER.exception("Failed to generate %s", report_name)
            raise
        if timings is not None:
            _LOGGER.debug(
                "Generated %s: %s",
                report_name,
                ", ".join(f"{name}={seconds * 1000:.2f}ms" for name, seconds in timings.items()),
            )

    def _time_series(
        self,
        report_name: str,
        fetch: Callable[[int], Sequence[TimeBoundedItem]],
        start_year: int | None,
        *,
        include_information_only: bool,
        classify: Classifier,
        dimension: Dimension,
    ) -> Report:
        today = self._clock()
        first_year = self._config.first_year if start_year is None else start_year
        with self._generating(report_name) as timings:
            with _profile_section("fetch", timings):
                items = fetch(first_year)
            with _profile_section("aggregate", timings):
                report = build_empty_report(first_year, today.year, dimension=dimension)
                aggregate_interval_report(
                    items,
                    report,
                    include_information_only=include_information_only,
                    classify=classify,
                    config=self._config,
                    today=today,
                )
        return report

    def _cross_section(
        self,
        report_name: str,
        fetch: Callable[[], Sequence[TimeBoundedItem]],
        *,
        classify: Classifier,
        dimension: Dimension,
    ) -> CrossSection:
        today = self._clock()
        with self._generating(report_name) as timings:
            with _profile_section("fetch", timings):
                items = fetch()
            with _profile_section("aggregate", timings):
                return aggregate_cross_section(
                    items,
                    classify=classify,
                    config=self._config,
                    today=today,
                    dimension=dimension,
                )

    def generate_requests_report(
        self, start_year: int | None = None, *, include_information: bool = False
    ) -> Report:
        return self._time_series(
            "requests report",
            lambda year: self._source.requests_since(year, information=include_information),
            start_year,
            include_information_only=include_information,
            classify=classify_locality,
            dimension=LOCALITIES,
        )

    def generate_packages_report(self, start_year: int | None = None) -> Report:
        return self._time_series(
            "packages report",
            self._source.packages_since,
            start_year,
            include_information_only=False,
            classify=classify_locality,
            dimension=LOCALITIES,
        )

    def generate_coordinator_report(self, start_year: int | None = None) -> Report:
        return self._time_series(
            "coordinator report",
            self._source.coordinator_packages,
            start_year,
            include_information_only=True,
            classify=classify_locality,
            dimension=LOCALITIES,
        )

    def generate_requests_deprivation_report(
        self, start_year: int | None = None, *, include_information: bool = False
    ) -> Report:
        return self._time_series(
            "requests deprivation report",
            lambda year: self._source.requests_since(year, information=include_information),
            start_year,
            include_information_only=include_information,
            classify=classify_deprivation,
            dimension=DEPRIVATION_CATEGORIES,
        )

    def generate_packages_deprivation_report(self, start_year: int | None = None) -> Report:
        return self._time_series(
            "packages deprivation report",
            self._source.packages_since,
            start_year,
            include_information_only=False,
            classify=classify_deprivation,
            dimension=DEPRIVATION_CATEGORIES,
        )

    def generate_active_requests_cross_section(self) -> CrossSection:
        return self._cross_section(
            "active requests cross section",
            self._source.active_requests,
            classify=classify_locality,
            dimension=LOCALITIES,
        )

    def generate_active_packages_cross_section(self) -> CrossSection:
        return self._cross_section(
            "active packages cross section",
            self._source.active_packages,
            classify=classify_locality,
            dimension=LOCALITIES,
        )

    def generate_active_requests_deprivation_cross_section(self) -> CrossSection:
        return self._cross_section(
            "active requests deprivation cross section",
            self._source.active_requests,
            classify=classify_deprivation,
            dimension=DEPRIVATION_CATEGORIES,
        )

    def generate_active_packages_deprivation_cross_section(self) -> CrossSection:
        return self._cross_section(
            "active packages deprivation cross section",
            self._source.active_packages,
            classify=classify_deprivation,
            dimension=DEPRIVATION_CATEGORIES,
        )

    def generate_attendance_allowance_report(
        self, start_year: int | None = None
    ) -> AttendanceAllowanceReport:
        today = self._clock()
        first_year = self._config.first_year if start_year is None else start_year
        with self._generating("attendance allowance report") as timings:
            with _profile_section("fetch", timings):
                clients = self._source.clients()
            with _profile_section("aggregate", timings):
                report = build_empty_attendance_allowance_report(first_year, today.year)
                aggregate_attendance_allowance(clients, report, config=self._config)
        return report

    def generate_coordinator_attendance_allowance_report(
        self, start_year: int | None = None
    ) -> AttendanceAllowanceReport:
        today = self._clock()
        first_year = self._config.first_year if start_year is None else start_year
        with self._generating("coordinator attendance allowance report") as timings:
            with _profile_section("fetch", timings):
                clients = self._source.clients()
                coordinator_ids = self._source.coordinator_ids()
            with _profile_section("aggregate", timings):
                report = build_empty_attendance_allowance_report(first_year, today.year)
                aggregate_coordinator_attendance_allowance(
                    clients, report, coordinator_ids, config=self._config
                )
        return report

    def generate_attendance_allowance_cross_section(self) -> AttendanceAllowanceCrossSection:
        today = self._clock()
        with self._generating("attendance allowance cross section") as timings:
            with _profile_section("fetch", timings):
                clients = self._source.open_clients()
            with _profile_section("aggregate", timings):
                return aggregate_attendance_allowance_cross_section(
                    clients, config=self._config, today=today
                )


__all__ = ["PROFILE_ENV", "ReportService"]
