"""JSON error payloads returned by the analytics API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import has_request_context, jsonify, request


@dataclass(frozen=True, slots=True)
class ProblemResponse:
    """An RFC 7807-style problem raised while serving a report request.

    ``report`` names the report that was being generated when the failure
    happened and ``instance`` is the request path, so a 500 can be matched to
    the ``Failed to generate ...`` log line written by the report service.
    """

    error: str
    status: int
    message: str | None = None
    report: str | None = None
    instance: str | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error, "status": self.status}
        for key in ("message", "report", "instance"):
            value = getattr(self, key)
            if value:
                payload[key] = value
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    report: str | None = None,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse` for the request being served, if any."""

    instance = request.path if has_request_context() else None
    return ProblemResponse(
        error=error, status=status, message=message, report=report, instance=instance
    )


__all__ = ["ProblemResponse", "problem_response"]
