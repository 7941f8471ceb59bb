"""Reporting services: aggregators, data-access collaborators, and the facade."""

from .attendance import (
    AttendanceAllowanceCrossSection,
    AttendanceAllowanceReport,
    aggregate_attendance_allowance,
    aggregate_attendance_allowance_cross_section,
    aggregate_coordinator_attendance_allowance,
    build_empty_attendance_allowance_report,
)
from .cross_section import aggregate_cross_section
from .interval_report import aggregate_interval_report, classify_deprivation, classify_locality
from .item_sources import InMemoryItemSource, ItemSource
from .report_service import ReportService

__all__ = [
    "AttendanceAllowanceCrossSection",
    "AttendanceAllowanceReport",
    "InMemoryItemSource",
    "ItemSource",
    "ReportService",
    "aggregate_attendance_allowance",
    "aggregate_attendance_allowance_cross_section",
    "aggregate_coordinator_attendance_allowance",
    "aggregate_cross_section",
    "aggregate_interval_report",
    "build_empty_attendance_allowance_report",
    "classify_deprivation",
    "classify_locality",
]
