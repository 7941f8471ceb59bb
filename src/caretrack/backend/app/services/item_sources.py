"""Data-access collaborators that feed items to the report service."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import date
from typing import Protocol

from caretrack.backend.app.models.items import (
    OPEN,
    ClientRecord,
    TimeBoundedItem,
    is_open_on,
)


class ItemSource(Protocol):
    """Queries the report service needs answered by a data-access layer."""

    def requests_since(self, start_year: int, *, information: bool) -> Sequence[TimeBoundedItem]:
        """Requests running in or after ``start_year``, either information-only or not."""

    def packages_since(self, start_year: int) -> Sequence[TimeBoundedItem]:
        """Packages running in or after ``start_year`` without information tags."""

    def active_requests(self) -> Sequence[TimeBoundedItem]:
        """Requests that have not ended yet, without information tags."""

    def active_packages(self) -> Sequence[TimeBoundedItem]:
        """Packages that have not ended yet, without information tags."""

    def coordinator_packages(self, start_year: int) -> Sequence[TimeBoundedItem]:
        """Packages since ``start_year`` delivered by a coordinator."""

    def clients(self) -> Sequence[ClientRecord]:
        """Every client, ended or not."""

    def open_clients(self) -> Sequence[ClientRecord]:
        """Clients whose case has not been closed yet."""

    def coordinator_ids(self) -> frozenset[str]:
        """Identifiers of staff members acting as coordinators."""


def _runs_since(item: TimeBoundedItem, start_year: int) -> bool:
    return item.end_date == OPEN or item.end_date.year >= start_year


class InMemoryItemSource:
    """Answer :class:`ItemSource` queries over plain, already-loaded lists."""

    def __init__(
        self,
        *,
        requests: Iterable[TimeBoundedItem] = (),
        packages: Iterable[TimeBoundedItem] = (),
        clients: Iterable[ClientRecord] = (),
        coordinator_ids: Iterable[str] = (),
        information_service: str = "Information",
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._requests = tuple(requests)
        self._packages = tuple(packages)
        self._clients = tuple(clients)
        self._coordinator_ids = frozenset(coordinator_ids)
        self._information_service = information_service
        self._clock = clock or date.today

    def _has_information(self, item: TimeBoundedItem) -> bool:
        return item.has_service(self._information_service)

    def requests_since(self, start_year: int, *, information: bool) -> list[TimeBoundedItem]:
        return [
            item
            for item in self._requests
            if _runs_since(item, start_year) and self._has_information(item) == information
        ]

    def packages_since(self, start_year: int) -> list[TimeBoundedItem]:
        return [
            item
            for item in self._packages
            if _runs_since(item, start_year) and not self._has_information(item)
        ]

    def active_requests(self) -> list[TimeBoundedItem]:
        today = self._clock()
        return [
            item
            for item in self._requests
            if is_open_on(item.end_date, today) and not self._has_information(item)
        ]

    def active_packages(self) -> list[TimeBoundedItem]:
        today = self._clock()
        return [
            item
            for item in self._packages
            if is_open_on(item.end_date, today) and not self._has_information(item)
        ]

    def coordinator_packages(self, start_year: int) -> list[TimeBoundedItem]:
        return [
            item
            for item in self._packages
            if _runs_since(item, start_year) and item.carer_id in self._coordinator_ids
        ]

    def clients(self) -> list[ClientRecord]:
        return list(self._clients)

    def open_clients(self) -> list[ClientRecord]:
        today = self._clock()
        return [client for client in self._clients if client.is_open_on(today)]

    def coordinator_ids(self) -> frozenset[str]:
        return self._coordinator_ids


__all__ = ["InMemoryItemSource", "ItemSource"]
