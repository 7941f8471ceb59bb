"""REST endpoints exposing the analytics reports.

Each endpoint receives the already-fetched records in its JSON body, binds
them to an in-memory item source, and returns the serialised report.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from caretrack.backend.app.models import ReportRequest, parse_clients, parse_items
from caretrack.backend.app.services import InMemoryItemSource, ReportService
from caretrack.backend.config.reporting_config import load_reporting_configuration
from caretrack.backend.services import build_report_response, parse_report_payload

blueprint = Blueprint("analytics", __name__, url_prefix="/api/v1/analytics")


def _build_service(payload: ReportRequest) -> ReportService:
    config = load_reporting_configuration()
    today = payload.reference_date()
    source = InMemoryItemSource(
        requests=parse_items(payload.requests),
        packages=parse_items(payload.packages),
        clients=parse_clients(payload.clients, config=config),
        coordinator_ids=payload.coordinator_ids,
        information_service=config.information_service,
        clock=lambda: today,
    )
    return ReportService(source, config=config, clock=lambda: today)


def _prepare() -> tuple[ReportService, ReportRequest, int]:
    payload = parse_report_payload(request)
    service = _build_service(payload)
    start_year = payload.resolve_start_year(service.config.first_year)
    return service, payload, start_year


@blueprint.post("/requests")
def requests_report() -> tuple[Any, int]:
    """Monthly hours of requests, broken down by service and locality."""

    service, payload, start_year = _prepare()
    return build_report_response(
        service.generate_requests_report(
            start_year, include_information=payload.include_information
        )
    )


@blueprint.post("/packages")
def packages_report() -> tuple[Any, int]:
    service, _, start_year = _prepare()
    return build_report_response(service.generate_packages_report(start_year))


@blueprint.post("/coordinator")
def coordinator_report() -> tuple[Any, int]:
    """Monthly hours of packages delivered by coordinators."""

    service, _, start_year = _prepare()
    return build_report_response(service.generate_coordinator_report(start_year))


@blueprint.post("/requests/deprivation")
def requests_deprivation_report() -> tuple[Any, int]:
    service, payload, start_year = _prepare()
    return build_report_response(
        service.generate_requests_deprivation_report(
            start_year, include_information=payload.include_information
        )
    )


@blueprint.post("/packages/deprivation")
def packages_deprivation_report() -> tuple[Any, int]:
    service, _, start_year = _prepare()
    return build_report_response(service.generate_packages_deprivation_report(start_year))


@blueprint.post("/requests/active")
def active_requests_cross_section() -> tuple[Any, int]:
    """Weekly hours currently committed to open requests."""

    service, _, _ = _prepare()
    return build_report_response(service.generate_active_requests_cross_section())


@blueprint.post("/packages/active")
def active_packages_cross_section() -> tuple[Any, int]:
    service, _, _ = _prepare()
    return build_report_response(service.generate_active_packages_cross_section())


@blueprint.post("/requests/active/deprivation")
def active_requests_deprivation_cross_section() -> tuple[Any, int]:
    service, _, _ = _prepare()
    return build_report_response(service.generate_active_requests_deprivation_cross_section())


@blueprint.post("/packages/active/deprivation")
def active_packages_deprivation_cross_section() -> tuple[Any, int]:
    service, _, _ = _prepare()
    return build_report_response(service.generate_active_packages_deprivation_cross_section())


@blueprint.post("/attendance-allowance")
def attendance_allowance_report() -> tuple[Any, int]:
    """Monthly counts of attendance-allowance requests and awards."""

    service, _, start_year = _prepare()
    return build_report_response(service.generate_attendance_allowance_report(start_year))


@blueprint.post("/attendance-allowance/coordinator")
def coordinator_attendance_allowance_report() -> tuple[Any, int]:
    service, _, start_year = _prepare()
    return build_report_response(
        service.generate_coordinator_attendance_allowance_report(start_year)
    )


@blueprint.post("/attendance-allowance/active")
def attendance_allowance_cross_section() -> tuple[Any, int]:
    service, _, _ = _prepare()
    return build_report_response(service.generate_attendance_allowance_cross_section())
