"""Leaf helpers for proration, keyed totals, and report scaffolds."""

from .buckets import BucketSet, DimensionalBucket, KeyedTotals, ServiceTotals, add_hours
from .proration import MonthSlice, prorate
from .scaffold import (
    DEPRIVATION_CATEGORIES,
    LOCALITIES,
    CrossSection,
    MonthReport,
    Report,
    ScaffoldLookupError,
    YearReport,
    build_empty_report,
)
from .utils import days_in_month, next_month, round_hours

__all__ = [
    "DEPRIVATION_CATEGORIES",
    "LOCALITIES",
    "BucketSet",
    "CrossSection",
    "DimensionalBucket",
    "KeyedTotals",
    "MonthReport",
    "MonthSlice",
    "Report",
    "ScaffoldLookupError",
    "ServiceTotals",
    "YearReport",
    "add_hours",
    "build_empty_report",
    "days_in_month",
    "next_month",
    "prorate",
    "round_hours",
]
