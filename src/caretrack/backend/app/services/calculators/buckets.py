"""Keyed running totals for services and dimensional buckets.

Every scope of a report (a cross-section, a year, a month, or a single
locality or deprivation bucket) owns its own accumulators. Entries are created
on first contribution and keep the order in which they first appeared.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from caretrack.backend.config.reporting_config import ReportingConfiguration

from .utils import round_hours


class KeyedTotals:
    """Insertion-ordered mapping of label to a rounded running total."""

    __slots__ = ("_totals",)

    def __init__(self) -> None:
        self._totals: dict[str, float] = {}

    def upsert_and_add(self, key: str, amount: float) -> float:
        """Add ``amount`` to ``key``, creating it at zero first if needed."""

        total = round_hours(self._totals.get(key, 0.0) + amount)
        self._totals[key] = total
        return total

    def get(self, key: str, default: float = 0.0) -> float:
        return self._totals.get(key, default)

    def sum(self) -> float:
        return round_hours(sum(self._totals.values()))

    def items(self) -> Iterator[tuple[str, float]]:
        return iter(self._totals.items())

    def __contains__(self, key: object) -> bool:
        return key in self._totals

    def __iter__(self) -> Iterator[str]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyedTotals):
            return NotImplemented
        return list(self._totals.items()) == list(other._totals.items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._totals!r})"

    def as_list(self) -> list[dict[str, Any]]:
        return [{"name": name, "total_hours": total} for name, total in self._totals.items()]


class ServiceTotals(KeyedTotals):
    """Service breakdown where unrecognised tags share the ``Other`` entry."""

    __slots__ = ()

    def add_services(
        self,
        hours: float,
        service_tags: Iterable[str],
        config: ReportingConfiguration,
    ) -> None:
        for tag in service_tags:
            name = tag if config.is_recognised_service(tag) else config.other_service
            self.upsert_and_add(name, hours)


@dataclass(slots=True)
class DimensionalBucket:
    """A named locality or deprivation bucket with its own service breakdown."""

    name: str
    total_hours: float = 0.0
    services: ServiceTotals = field(default_factory=ServiceTotals)

    def add(self, hours: float, service_tags: Iterable[str], config: ReportingConfiguration) -> None:
        self.total_hours = round_hours(self.total_hours + hours)
        self.services.add_services(hours, service_tags, config)

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "total_hours": self.total_hours,
            "services": self.services.as_list(),
        }


class BucketSet:
    """Find-or-create collection of :class:`DimensionalBucket` keyed by name."""

    __slots__ = ("_buckets",)

    def __init__(self) -> None:
        self._buckets: dict[str, DimensionalBucket] = {}

    def upsert_and_add(
        self,
        label: str,
        hours: float,
        service_tags: Iterable[str],
        config: ReportingConfiguration,
    ) -> DimensionalBucket:
        bucket = self._buckets.get(label)
        if bucket is None:
            bucket = DimensionalBucket(name=label)
            self._buckets[label] = bucket
        bucket.add(hours, service_tags, config)
        return bucket

    def get(self, label: str) -> DimensionalBucket | None:
        return self._buckets.get(label)

    def sum(self) -> float:
        return round_hours(sum(bucket.total_hours for bucket in self._buckets.values()))

    def __contains__(self, label: object) -> bool:
        return label in self._buckets

    def __iter__(self) -> Iterator[DimensionalBucket]:
        return iter(self._buckets.values())

    def __len__(self) -> int:
        return len(self._buckets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BucketSet):
            return NotImplemented
        return list(self._buckets.items()) == list(other._buckets.items())

    def __repr__(self) -> str:
        return f"BucketSet({list(self._buckets.values())!r})"

    def as_list(self) -> list[dict[str, Any]]:
        return [bucket.as_dict() for bucket in self._buckets.values()]


def add_hours(
    hours: float,
    buckets: BucketSet,
    label: str,
    service_tags: Iterable[str],
    config: ReportingConfiguration,
) -> DimensionalBucket:
    """Credit ``hours`` to the bucket named ``label`` and its service breakdown."""

    return buckets.upsert_and_add(label, hours, tuple(service_tags), config)


__all__ = [
    "BucketSet",
    "DimensionalBucket",
    "KeyedTotals",
    "ServiceTotals",
    "add_hours",
]
