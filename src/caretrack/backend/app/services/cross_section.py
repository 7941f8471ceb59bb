"""Point-in-time weekly commitment across the items open today."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from caretrack.backend.app.models.items import TimeBoundedItem, is_open_on
from caretrack.backend.config.reporting_config import ReportingConfiguration

from .calculators import LOCALITIES, CrossSection
from .calculators.scaffold import Dimension
from .interval_report import Classifier

_LOGGER = logging.getLogger(__name__)


def aggregate_cross_section(
    items: Iterable[TimeBoundedItem],
    *,
    classify: Classifier,
    config: ReportingConfiguration,
    today: date,
    dimension: Dimension = LOCALITIES,
    include_information_only: bool = False,
) -> CrossSection:
    """Sum the full weekly rate of each open item; no proration is applied."""

    cross_section = CrossSection(dimension=dimension)
    for item in items:
        if not is_open_on(item.end_date, today):
            _LOGGER.debug("Skipping item %s: ended %s", item.id, item.end_date)
            continue
        if not include_information_only and item.is_information_only(config.information_service):
            continue
        cross_section.contribute(item.weekly_hours, classify(item, config), item.services, config)
    return cross_section


__all__ = ["aggregate_cross_section"]
