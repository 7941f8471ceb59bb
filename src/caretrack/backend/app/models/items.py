"""Pydantic models for the records consumed by the reporting engine.

Items arrive already fetched by a data-access collaborator. Validation happens
once at this boundary so the aggregators can rely on real ``date`` values and
non-negative rates; entries that cannot be validated are dropped here rather
than failing a whole report.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, Literal, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from caretrack.backend.config.schema import AttendanceAllowanceConfig, ReportingConfiguration

_LOGGER = logging.getLogger(__name__)

OPEN: Literal["open"] = "open"

EndDate = date | Literal["open"]

HOURS_PER_WEEK = 168
MAX_ONE_OFF_HOURS = 744
MAX_CLAIM_HOURS = 100

_DEFAULT_ATTENDANCE_ALLOWANCE = AttendanceAllowanceConfig()


def resolve_end_date(end_date: EndDate, today: date) -> date:
    """Return ``today`` for open-ended records, otherwise the recorded end date."""

    if end_date == OPEN:
        return today
    return end_date


def is_open_on(end_date: EndDate, today: date) -> bool:
    """Return ``True`` when a record with ``end_date`` is still running on ``today``."""

    return end_date == OPEN or end_date >= today


class _RecordModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, extra="ignore", populate_by_name=True, allow_inf_nan=False
    )


class DeprivationFlags(_RecordModel):
    """Income and health deprivation indicators for an address."""

    income: bool = False
    health: bool = False


class Address(_RecordModel):
    """Geographic classification of the person receiving care."""

    locality: str | None = None
    postcode: str | None = None
    deprivation: DeprivationFlags | None = None

    @field_validator("locality", mode="before")
    @classmethod
    def _blank_locality_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TimeBoundedItem(_RecordModel):
    """A service request or care package delivering hours over an interval."""

    id: str | None = None
    start_date: date
    end_date: EndDate = OPEN
    weekly_hours: float = Field(default=0.0, ge=0, le=HOURS_PER_WEEK)
    one_off_start_date_hours: float = Field(default=0.0, ge=0, le=MAX_ONE_OFF_HOURS)
    services: tuple[str, ...] = ()
    address: Address | None = None
    carer_id: str | None = None

    @field_validator("one_off_start_date_hours", mode="before")
    @classmethod
    def _missing_one_off_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("services", mode="before")
    @classmethod
    def _coerce_services(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    def resolved_end_date(self, today: date) -> date:
        return resolve_end_date(self.end_date, today)

    def is_information_only(self, information_service: str) -> bool:
        return len(self.services) == 1 and self.services[0] == information_service

    def has_service(self, service: str) -> bool:
        return service in self.services


def _attendance_allowance_settings(info: ValidationInfo) -> AttendanceAllowanceConfig:
    """Return the claim vocabulary passed as validation context, or the defaults."""

    context = info.context or {}
    return context.get("attendance_allowance") or _DEFAULT_ATTENDANCE_ALLOWANCE


class AttendanceAllowanceRecord(_RecordModel):
    """Lifecycle of an attendance-allowance claim made on behalf of a client."""

    status: str | None = None
    requested_level: str | None = None
    requested_date: date | None = None
    confirmation_date: date | None = None
    hours_to_complete_request: float = Field(default=0.0, ge=0, le=MAX_CLAIM_HOURS)
    completed_by: str | None = None

    @field_validator("status", "requested_level", "requested_date", "confirmation_date", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("hours_to_complete_request", mode="before")
    @classmethod
    def _missing_hours_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str | None, info: ValidationInfo) -> str | None:
        statuses = _attendance_allowance_settings(info).statuses
        if value is not None and value not in statuses:
            raise ValueError(f"Unknown attendance allowance status '{value}'")
        return value

    @field_validator("requested_level")
    @classmethod
    def _known_level(cls, value: str | None, info: ValidationInfo) -> str | None:
        levels = _attendance_allowance_settings(info).receiving_statuses
        if value is not None and value not in levels:
            raise ValueError(f"Unknown attendance allowance level '{value}'")
        return value


class ClientRecord(_RecordModel):
    """A client together with their attendance-allowance claim, if any."""

    id: str | None = None
    start_date: date | None = None
    end_date: EndDate = OPEN
    attendance_allowance: AttendanceAllowanceRecord | None = None

    def is_open_on(self, today: date) -> bool:
        return is_open_on(self.end_date, today)


ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse_records(
    model: type[ModelT],
    raw_records: Iterable[Mapping[str, Any] | ModelT],
    context: dict[str, Any] | None = None,
) -> list[ModelT]:
    parsed: list[ModelT] = []
    for index, raw in enumerate(raw_records):
        if isinstance(raw, model):
            parsed.append(raw)
            continue
        try:
            parsed.append(model.model_validate(raw, context=context))
        except ValidationError as error:
            _LOGGER.debug(
                "Skipping %s #%d: %s", model.__name__, index, error.errors(include_url=False)
            )
    return parsed


def parse_items(raw_items: Iterable[Mapping[str, Any] | TimeBoundedItem]) -> list[TimeBoundedItem]:
    """Validate ``raw_items`` one by one, dropping entries that fail validation."""

    return _parse_records(TimeBoundedItem, raw_items)


def parse_clients(
    raw_clients: Iterable[Mapping[str, Any] | ClientRecord],
    *,
    config: ReportingConfiguration | None = None,
) -> list[ClientRecord]:
    """Validate ``raw_clients`` one by one, dropping entries that fail validation.

    Claim statuses and levels are checked against ``config`` when given and
    against the default vocabulary otherwise.
    """

    context = None if config is None else {"attendance_allowance": config.attendance_allowance}
    return _parse_records(ClientRecord, raw_clients, context)


__all__ = [
    "OPEN",
    "Address",
    "AttendanceAllowanceRecord",
    "ClientRecord",
    "DeprivationFlags",
    "EndDate",
    "HOURS_PER_WEEK",
    "MAX_CLAIM_HOURS",
    "MAX_ONE_OFF_HOURS",
    "TimeBoundedItem",
    "is_open_on",
    "parse_clients",
    "parse_items",
    "resolve_end_date",
]
