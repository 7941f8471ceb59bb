"""Pydantic models describing the reporting configuration schema."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _coerce_labels(value: Any, *, field: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ConfigurationError(f"'{field}' must be a list of labels")
    labels = tuple(str(entry).strip() for entry in value)
    if any(not label for label in labels):
        raise ConfigurationError(f"'{field}' entries must be non-empty strings")
    return labels


class DeprivationCategoryLabels(ImmutableModel):
    """Labels for the four combinations of income and health deprivation."""

    health_and_income: str = "Health & Income"
    health_only: str = "Health Only"
    income_only: str = "Income Only"
    neither: str = "Neither"

    def label_for(self, *, income: bool, health: bool) -> str:
        if health and income:
            return self.health_and_income
        if health:
            return self.health_only
        if income:
            return self.income_only
        return self.neither

    @computed_field
    @property
    def labels(self) -> tuple[str, ...]:
        return (
            self.health_and_income,
            self.health_only,
            self.income_only,
            self.neither,
        )


class AttendanceAllowanceConfig(ImmutableModel):
    """Status vocabulary for attendance-allowance counting."""

    statuses: Sequence[str] = Field(
        default=("Unsent", "Pending", "Low", "High"),
    )
    receiving_statuses: Sequence[str] = Field(default=("Low", "High"))
    high_level: str = "High"

    @field_validator("statuses", "receiving_statuses", mode="before")
    @classmethod
    def _coerce_statuses(cls, value: Any, info: ValidationInfo) -> tuple[str, ...]:
        return _coerce_labels(value, field=info.field_name)

    @model_validator(mode="after")
    def _validate_statuses(self) -> Self:
        unknown = [status for status in self.receiving_statuses if status not in self.statuses]
        if unknown:
            raise ConfigurationError(
                f"Receiving statuses must be declared statuses: {', '.join(unknown)}"
            )
        if self.high_level not in self.receiving_statuses:
            raise ConfigurationError("'high_level' must be one of the receiving statuses")
        return self


class ReportingConfiguration(ImmutableModel):
    """Vocabulary and defaults shared by every report family."""

    first_year: int = Field(default=2017, ge=1900, le=2100)
    services: Sequence[str]
    information_service: str = "Information"
    other_service: str = "Other"
    unknown_label: str = "Unknown"
    deprivation_categories: DeprivationCategoryLabels = Field(
        default_factory=DeprivationCategoryLabels
    )
    attendance_allowance: AttendanceAllowanceConfig = Field(
        default_factory=AttendanceAllowanceConfig
    )

    @model_validator(mode="before")
    @classmethod
    def _prepare(cls, data: Any) -> Mapping[str, Any]:
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration file must define a mapping at the top level")

        prepared = dict(data)
        for section in ("deprivation_categories", "attendance_allowance"):
            if prepared.get(section) is None:
                prepared.pop(section, None)
        return prepared

    @field_validator("services", mode="before")
    @classmethod
    def _coerce_services(cls, value: Any) -> tuple[str, ...]:
        services = _coerce_labels(value, field="services")
        if not services:
            raise ConfigurationError("At least one service must be configured")
        return services

    @model_validator(mode="after")
    def _validate_vocabulary(self) -> Self:
        if self.other_service in self.services:
            raise ConfigurationError(
                f"'{self.other_service}' is reserved for unrecognised services"
            )
        return self

    def is_recognised_service(self, name: str) -> bool:
        return name in self.services


__all__ = [
    "AttendanceAllowanceConfig",
    "ConfigurationError",
    "DeprivationCategoryLabels",
    "ImmutableModel",
    "ReportingConfiguration",
    "ValidationError",
]
