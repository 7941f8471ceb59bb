"""Pydantic models describing the public analytics API surface."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "ReportRequest",
    "format_validation_error",
]


class ReportRequest(BaseModel):
    """Payload accepted by every analytics endpoint.

    Records are kept as raw mappings here and validated one at a time by
    :func:`~caretrack.backend.app.models.items.parse_items`, so a single
    malformed record is dropped instead of rejecting the whole request.
    """

    model_config = ConfigDict(extra="forbid")

    start_year: int | None = Field(default=None, ge=1900, le=2100)
    include_information: bool = False
    today: date | None = None
    requests: list[Any] = Field(default_factory=list)
    packages: list[Any] = Field(default_factory=list)
    clients: list[Any] = Field(default_factory=list)
    coordinator_ids: list[str] = Field(default_factory=list)

    @field_validator("include_information", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if value is None:
            return False
        return value

    def reference_date(self) -> date:
        return self.today or date.today()

    def resolve_start_year(self, default: int) -> int:
        start_year = default if self.start_year is None else self.start_year
        current_year = self.reference_date().year
        if start_year > current_year:
            raise ValueError(
                f"start_year {start_year} cannot be after the current year {current_year}"
            )
        return start_year


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid report payload: {details}"
