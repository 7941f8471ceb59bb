"""Expose the reporting vocabulary so clients can label charts consistently."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from caretrack.backend.config.reporting_config import load_reporting_configuration
from caretrack.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Return the version and reporting range shared by health and config endpoints."""

    config = load_reporting_configuration()
    return {"version": get_project_version(), "first_year": config.first_year}


@blueprint.get("/reporting")
def reporting_vocabulary() -> tuple[Any, int]:
    config = load_reporting_configuration()
    payload = {
        **get_configuration_metadata(),
        "services": list(config.services),
        "other_service": config.other_service,
        "information_service": config.information_service,
        "unknown_label": config.unknown_label,
        "deprivation_categories": list(config.deprivation_categories.labels),
        "attendance_allowance_statuses": list(config.attendance_allowance.statuses),
    }
    return jsonify(payload), 200
