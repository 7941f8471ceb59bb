"""Accumulate prorated item hours into year/month time-series reports."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date

from caretrack.backend.app.models.items import TimeBoundedItem
from caretrack.backend.config.reporting_config import ReportingConfiguration

from .calculators import Report, prorate

_LOGGER = logging.getLogger(__name__)

Classifier = Callable[[TimeBoundedItem, ReportingConfiguration], str]


def classify_locality(item: TimeBoundedItem, config: ReportingConfiguration) -> str:
    """Return the item's locality, or the unknown label when no address is held."""

    if item.address is None or item.address.locality is None:
        return config.unknown_label
    return item.address.locality


def classify_deprivation(item: TimeBoundedItem, config: ReportingConfiguration) -> str:
    """Map the item's income/health deprivation flags onto a category label."""

    if item.address is None or item.address.deprivation is None:
        return config.unknown_label
    flags = item.address.deprivation
    return config.deprivation_categories.label_for(income=flags.income, health=flags.health)


def _add_hours_to_report(
    hours: float,
    report: Report,
    year: int,
    month: int,
    label: str,
    services: tuple[str, ...],
    config: ReportingConfiguration,
) -> None:
    if not report.covers(year, month):
        _LOGGER.debug("Discarding %.2f hours for %04d-%02d outside the report", hours, year, month)
        return

    year_report, month_report = report.locate(year, month)
    year_report.contribute(hours, label, services, config)
    month_report.contribute(hours, label, services, config)


def add_item_to_report(
    item: TimeBoundedItem,
    report: Report,
    *,
    include_information_only: bool,
    classify: Classifier,
    config: ReportingConfiguration,
    today: date,
) -> bool:
    """Add ``item`` to ``report``; return ``False`` when the item was skipped."""

    start = item.start_date
    end = item.resolved_end_date(today)
    if start > end:
        _LOGGER.debug("Skipping item %s: starts %s after it ends %s", item.id, start, end)
        return False
    if not include_information_only and item.is_information_only(config.information_service):
        return False

    label = classify(item, config)
    services = item.services

    _add_hours_to_report(
        item.one_off_start_date_hours, report, start.year, start.month, label, services, config
    )
    for month_slice in prorate(start, end, item.weekly_hours):
        _add_hours_to_report(
            month_slice.hours,
            report,
            month_slice.year,
            month_slice.month,
            label,
            services,
            config,
        )
    return True


def aggregate_interval_report(
    items: Iterable[TimeBoundedItem],
    report: Report,
    *,
    include_information_only: bool,
    classify: Classifier,
    config: ReportingConfiguration,
    today: date,
) -> None:
    """Accumulate every item of ``items`` into ``report`` in place."""

    added = skipped = 0
    for item in items:
        if add_item_to_report(
            item,
            report,
            include_information_only=include_information_only,
            classify=classify,
            config=config,
            today=today,
        ):
            added += 1
        else:
            skipped += 1
    _LOGGER.debug("Aggregated %d item(s) into report, skipped %d", added, skipped)


__all__ = [
    "Classifier",
    "add_item_to_report",
    "aggregate_interval_report",
    "classify_deprivation",
    "classify_locality",
]
