"""Attendance-allowance claim counting.

Unlike the hours reports nothing is prorated here: each client's claim is
classified into a handful of flags and those flags are counted in the month of
the relevant lifecycle event. Requests are counted when they were made and
awards when they were confirmed.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from caretrack.backend.app.models.items import AttendanceAllowanceRecord, ClientRecord
from caretrack.backend.config.reporting_config import ReportingConfiguration

from .calculators import ScaffoldLookupError, round_hours
from .calculators.scaffold import MONTHS

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AttendanceAllowanceFlags:
    has_requested: bool
    has_requested_high: bool
    is_receiving: bool
    is_receiving_high: bool

    @property
    def is_receiving_high_and_requested_high(self) -> bool:
        return self.is_receiving_high and self.has_requested_high


def classify_attendance_allowance(
    record: AttendanceAllowanceRecord, config: ReportingConfiguration
) -> AttendanceAllowanceFlags:
    settings = config.attendance_allowance
    return AttendanceAllowanceFlags(
        has_requested=record.status is not None,
        has_requested_high=record.requested_level == settings.high_level,
        is_receiving=record.status in settings.receiving_statuses,
        is_receiving_high=record.status == settings.high_level,
    )


@dataclass(slots=True, kw_only=True)
class AttendanceAllowanceCounts:
    """Claim counters for one period (or for a snapshot)."""

    requested: int = 0
    requested_high: int = 0
    receiving: int = 0
    receiving_high: int = 0
    receiving_high_requested_high: int = 0

    def add_requested(self, flags: AttendanceAllowanceFlags) -> None:
        self.requested += int(flags.has_requested)
        self.requested_high += int(flags.has_requested_high)

    def add_receiving(self, flags: AttendanceAllowanceFlags) -> None:
        self.receiving += int(flags.is_receiving)
        self.receiving_high += int(flags.is_receiving_high)
        self.receiving_high_requested_high += int(flags.is_receiving_high_and_requested_high)

    def add_all(self, flags: AttendanceAllowanceFlags) -> None:
        self.add_requested(flags)
        self.add_receiving(flags)

    def as_dict(self) -> dict[str, Any]:
        return {
            "requested": self.requested,
            "requested_high": self.requested_high,
            "receiving": self.receiving,
            "receiving_high": self.receiving_high,
            "receiving_high_requested_high": self.receiving_high_requested_high,
        }


@dataclass(slots=True, kw_only=True)
class AttendanceAllowancePeriod(AttendanceAllowanceCounts):
    """Counts for a year or month, plus the staff hours spent completing claims."""

    total_hours: float = 0.0

    def add_hours(self, hours: float) -> None:
        self.total_hours = round_hours(self.total_hours + hours)

    def as_dict(self) -> dict[str, Any]:
        payload = AttendanceAllowanceCounts.as_dict(self)
        payload["total_hours"] = self.total_hours
        return payload


@dataclass(slots=True, kw_only=True)
class AttendanceAllowanceMonth(AttendanceAllowancePeriod):
    month: int

    def as_dict(self) -> dict[str, Any]:
        return {"month": self.month, **AttendanceAllowancePeriod.as_dict(self)}


@dataclass(slots=True, kw_only=True)
class AttendanceAllowanceYear(AttendanceAllowancePeriod):
    year: int
    months: list[AttendanceAllowanceMonth]

    def as_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            **AttendanceAllowancePeriod.as_dict(self),
            "months": [month.as_dict() for month in self.months],
        }


@dataclass(slots=True)
class AttendanceAllowanceReport:
    years: list[AttendanceAllowanceYear] = field(default_factory=list)

    def covers(self, event_date: date) -> bool:
        return bool(self.years) and self.years[0].year <= event_date.year <= self.years[-1].year

    def locate(self, event_date: date) -> tuple[AttendanceAllowanceYear, AttendanceAllowanceMonth]:
        if not self.covers(event_date):
            raise ScaffoldLookupError(
                f"Year {event_date.year} not found in attendance allowance report"
            )
        year_report = self.years[event_date.year - self.years[0].year]
        return year_report, year_report.months[event_date.month - 1]

    def as_dict(self) -> dict[str, Any]:
        return {"years": [year.as_dict() for year in self.years]}


@dataclass(slots=True)
class AttendanceAllowanceCrossSection:
    overall_in_receipt: AttendanceAllowanceCounts = field(
        default_factory=AttendanceAllowanceCounts
    )
    this_month_confirmed: AttendanceAllowanceCounts = field(
        default_factory=AttendanceAllowanceCounts
    )

    def as_dict(self) -> dict[str, Any]:
        return {
            "overall_in_receipt": self.overall_in_receipt.as_dict(),
            "this_month_confirmed": self.this_month_confirmed.as_dict(),
        }


def build_empty_attendance_allowance_report(
    start_year: int, current_year: int
) -> AttendanceAllowanceReport:
    years = [
        AttendanceAllowanceYear(
            year=year, months=[AttendanceAllowanceMonth(month=month) for month in MONTHS]
        )
        for year in range(start_year, current_year + 1)
    ]
    return AttendanceAllowanceReport(years=years)


def _claims(clients: Iterable[ClientRecord]) -> Iterable[tuple[ClientRecord, AttendanceAllowanceRecord]]:
    for client in clients:
        if client.attendance_allowance is not None:
            yield client, client.attendance_allowance


def aggregate_attendance_allowance(
    clients: Iterable[ClientRecord],
    report: AttendanceAllowanceReport,
    *,
    config: ReportingConfiguration,
) -> None:
    """Count requests by request date and awards by confirmation date."""

    for client, claim in _claims(clients):
        flags = classify_attendance_allowance(claim, config)

        if claim.requested_date is not None:
            if report.covers(claim.requested_date):
                year_report, month_report = report.locate(claim.requested_date)
                year_report.add_requested(flags)
                month_report.add_requested(flags)
            else:
                _LOGGER.debug("Client %s requested outside the report range", client.id)

        if claim.confirmation_date is not None:
            if report.covers(claim.confirmation_date):
                year_report, month_report = report.locate(claim.confirmation_date)
                for period in (year_report, month_report):
                    period.add_receiving(flags)
                    period.add_hours(claim.hours_to_complete_request)
            else:
                _LOGGER.debug("Client %s confirmed outside the report range", client.id)


def aggregate_coordinator_attendance_allowance(
    clients: Iterable[ClientRecord],
    report: AttendanceAllowanceReport,
    coordinator_ids: Collection[str],
    *,
    config: ReportingConfiguration,
) -> None:
    """Count claims completed by coordinators, all keyed by confirmation date."""

    for client, claim in _claims(clients):
        if claim.completed_by is None or claim.completed_by not in coordinator_ids:
            continue
        if claim.confirmation_date is None or not report.covers(claim.confirmation_date):
            _LOGGER.debug("Client %s has no confirmation inside the report range", client.id)
            continue

        flags = classify_attendance_allowance(claim, config)
        year_report, month_report = report.locate(claim.confirmation_date)
        for period in (year_report, month_report):
            period.add_all(flags)
            period.add_hours(claim.hours_to_complete_request)


def aggregate_attendance_allowance_cross_section(
    clients: Iterable[ClientRecord],
    *,
    config: ReportingConfiguration,
    today: date,
) -> AttendanceAllowanceCrossSection:
    """Count claims for clients open today, and separately those confirmed this month."""

    cross_section = AttendanceAllowanceCrossSection()
    for client, claim in _claims(clients):
        if not client.is_open_on(today):
            continue

        flags = classify_attendance_allowance(claim, config)
        cross_section.overall_in_receipt.add_all(flags)

        confirmed = claim.confirmation_date
        if confirmed is not None and (confirmed.year, confirmed.month) == (today.year, today.month):
            cross_section.this_month_confirmed.add_all(flags)
    return cross_section


__all__ = [
    "AttendanceAllowanceCounts",
    "AttendanceAllowanceCrossSection",
    "AttendanceAllowanceFlags",
    "AttendanceAllowanceMonth",
    "AttendanceAllowancePeriod",
    "AttendanceAllowanceReport",
    "AttendanceAllowanceYear",
    "aggregate_attendance_allowance",
    "aggregate_attendance_allowance_cross_section",
    "aggregate_coordinator_attendance_allowance",
    "build_empty_attendance_allowance_report",
    "classify_attendance_allowance",
]
