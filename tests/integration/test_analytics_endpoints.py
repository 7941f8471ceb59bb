"""Integration tests for the analytics report endpoints."""

from http import HTTPStatus
from typing import Any

import pytest
from flask.testing import FlaskClient

from caretrack.backend.app.services import report_service as report_service_module
from caretrack.backend.app.services.calculators import ScaffoldLookupError

TODAY = "2025-06-15"

REQUESTS = [
    {
        "id": "request-1",
        "start_date": "2025-05-01",
        "end_date": "open",
        "weekly_hours": 7,
        "services": ["Personal Care"],
        "address": {
            "locality": "Milverton",
            "deprivation": {"income": True, "health": True},
        },
    },
    {
        "id": "information-1",
        "start_date": "2025-05-01",
        "weekly_hours": 7,
        "services": ["Information"],
    },
    {"id": "broken", "start_date": "2025-13-01", "weekly_hours": 3},
]

PACKAGES = [
    {
        "id": "package-1",
        "start_date": "2025-06-01",
        "end_date": "2025-06-30",
        "weekly_hours": 14,
        "services": ["Domestic", "Gardening"],
        "carer_id": "coord-1",
    },
]

CLIENTS = [
    {
        "id": "client-1",
        "attendance_allowance": {
            "status": "High",
            "requested_level": "High",
            "requested_date": "2025-03-01",
            "confirmation_date": "2025-06-04",
            "hours_to_complete_request": 1.5,
            "completed_by": "coord-1",
        },
    }
]


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "today": TODAY,
        "start_year": 2025,
        "requests": REQUESTS,
        "packages": PACKAGES,
        "clients": CLIENTS,
        "coordinator_ids": ["coord-1"],
    }
    payload.update(overrides)
    return payload


def test_requests_report_prorates_and_skips_invalid_records(client: FlaskClient) -> None:
    response = client.post("/api/v1/analytics/requests", json=_payload())

    assert response.status_code == HTTPStatus.OK
    years = response.get_json()["years"]
    assert [year["year"] for year in years] == [2025]
    year = years[0]
    assert year["total_hours"] == 45.0
    assert year["services"] == [{"name": "Personal Care", "total_hours": 45.0}]
    assert year["localities"][0]["name"] == "Milverton"
    assert year["months"][4]["total_hours"] == 31.0
    assert year["months"][5]["total_hours"] == 14.0


def test_requests_report_includes_information_when_asked(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/analytics/requests?include_information=true",
        json=_payload(),
    )

    assert response.status_code == HTTPStatus.OK
    year = response.get_json()["years"][0]
    assert [service["name"] for service in year["services"]] == ["Information"]


def test_packages_report_counts_unrecognised_services_as_other(client: FlaskClient) -> None:
    response = client.post("/api/v1/analytics/packages", json=_payload())

    assert response.status_code == HTTPStatus.OK
    june = response.get_json()["years"][0]["months"][5]
    assert june["total_hours"] == 60.0
    assert june["services"] == [
        {"name": "Domestic", "total_hours": 60.0},
        {"name": "Other", "total_hours": 60.0},
    ]
    assert june["localities"][0]["name"] == "Unknown"


def test_coordinator_report_uses_coordinator_packages(client: FlaskClient) -> None:
    response = client.post("/api/v1/analytics/coordinator", json=_payload(coordinator_ids=[]))

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["years"][0]["total_hours"] == 0.0


def test_deprivation_report_uses_category_buckets(client: FlaskClient) -> None:
    response = client.post("/api/v1/analytics/requests/deprivation", json=_payload())

    assert response.status_code == HTTPStatus.OK
    year = response.get_json()["years"][0]
    assert "localities" not in year
    assert year["deprivation_categories"][0]["name"] == "Health & Income"


def test_active_cross_section(client: FlaskClient) -> None:
    response = client.post("/api/v1/analytics/requests/active", json=_payload())

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["total_hours"] == 7.0
    assert payload["localities"] == [
        {
            "name": "Milverton",
            "total_hours": 7.0,
            "services": [{"name": "Personal Care", "total_hours": 7.0}],
        }
    ]


@pytest.mark.parametrize(
    "path",
    [
        "/api/v1/analytics/packages/deprivation",
        "/api/v1/analytics/packages/active",
        "/api/v1/analytics/requests/active/deprivation",
        "/api/v1/analytics/packages/active/deprivation",
    ],
)
def test_remaining_report_endpoints_respond(client: FlaskClient, path: str) -> None:
    response = client.post(path, json=_payload())

    assert response.status_code == HTTPStatus.OK
    assert "total_hours" in response.get_data(as_text=True)


def test_attendance_allowance_endpoints(client: FlaskClient) -> None:
    report = client.post("/api/v1/analytics/attendance-allowance", json=_payload())
    coordinator = client.post(
        "/api/v1/analytics/attendance-allowance/coordinator", json=_payload()
    )
    active = client.post("/api/v1/analytics/attendance-allowance/active", json=_payload())

    assert report.status_code == HTTPStatus.OK
    months = report.get_json()["years"][0]["months"]
    assert months[2]["requested"] == 1
    assert months[5]["receiving_high_requested_high"] == 1
    assert months[5]["total_hours"] == 1.5

    assert coordinator.get_json()["years"][0]["months"][5]["requested"] == 1
    assert active.get_json()["this_month_confirmed"]["receiving"] == 1


def test_empty_body_defaults_to_first_year(client: FlaskClient) -> None:
    response = client.post("/api/v1/analytics/packages")

    assert response.status_code == HTTPStatus.OK
    years = response.get_json()["years"]
    assert years[0]["year"] == 2017


def test_future_start_year_is_rejected(client: FlaskClient) -> None:
    response = client.post("/api/v1/analytics/requests", json=_payload(start_year=2026))

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "2026" in payload["message"]


def test_malformed_json_is_rejected(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/analytics/requests",
        data="{not json",
        content_type="application/json",
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "bad_request"


def test_unknown_payload_fields_are_rejected(client: FlaskClient) -> None:
    response = client.post("/api/v1/analytics/packages", json=_payload(colour="blue"))

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "colour" in response.get_json()["message"]


def test_non_finite_hours_are_dropped_not_fatal(client: FlaskClient) -> None:
    body = (
        '{"today": "2025-06-15", "start_year": 2025, "requests": ['
        '{"id": "endless", "start_date": "2025-06-01", "weekly_hours": Infinity},'
        '{"id": "normal", "start_date": "2025-06-01", "weekly_hours": 7,'
        ' "services": ["Domestic"]}]}'
    )

    response = client.post(
        "/api/v1/analytics/requests", data=body, content_type="application/json"
    )

    assert response.status_code == HTTPStatus.OK
    june = response.get_json()["years"][0]["months"][5]
    assert june["total_hours"] == 15.0
    assert june["services"] == [{"name": "Domestic", "total_hours": 15.0}]


def test_oversized_hours_are_dropped_from_cross_section(client: FlaskClient) -> None:
    requests = [
        {"id": "huge", "start_date": "2025-06-01", "weekly_hours": 1e30},
        {"id": "normal", "start_date": "2025-06-01", "weekly_hours": 7},
    ]

    response = client.post(
        "/api/v1/analytics/requests/active", json=_payload(requests=requests)
    )

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["total_hours"] == 7.0


def test_scaffold_failure_reports_the_failing_report(
    client: FlaskClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    def write_outside_scaffold(*args: Any, **kwargs: Any) -> None:
        raise ScaffoldLookupError("Year 1999 not found in report")

    monkeypatch.setattr(
        report_service_module, "aggregate_interval_report", write_outside_scaffold
    )

    response = client.post("/api/v1/analytics/packages", json=_payload())

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json() == {
        "error": "report_inconsistent",
        "status": 500,
        "message": "Year 1999 not found in report",
        "report": "packages report",
        "instance": "/api/v1/analytics/packages",
    }
