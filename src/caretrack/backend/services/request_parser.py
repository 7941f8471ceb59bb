"""Helpers for normalising incoming analytics requests."""

from __future__ import annotations

from collections.abc import Mapping

from flask import Request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from caretrack.backend.app.models import ReportRequest, format_validation_error


def parse_report_payload(req: Request) -> ReportRequest:
    """Extract and validate the JSON report envelope from ``req``.

    An empty body is accepted and treated as a request with no records, and
    ``start_year``/``include_information`` may also arrive as query parameters.
    """

    data = req.get_json(silent=True)
    if data is None:
        if req.get_data(cache=True):
            raise BadRequest("Request body must be valid JSON")
        data = {}
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)
    for key in ("start_year", "include_information"):
        if key not in payload and key in req.args:
            payload[key] = req.args[key]

    try:
        return ReportRequest.model_validate(payload)
    except ValidationError as error:
        raise ValueError(format_validation_error(error)) from error
