from datetime import date

from caretrack.backend.config import validator
from caretrack.backend.config.reporting_config import (
    CONFIG_PATH_ENV,
    ReportingConfiguration,
    load_reporting_configuration,
)
from caretrack.backend.config.validator import validate_reporting_configuration


def test_bundled_configuration_is_valid(config: ReportingConfiguration) -> None:
    assert validate_reporting_configuration(config, today=date(2025, 6, 15)) == []


def test_validator_flags_future_first_year(config: ReportingConfiguration) -> None:
    broken = config.model_copy(update={"first_year": 2030})

    errors = validate_reporting_configuration(broken, today=date(2025, 6, 15))

    assert any(error.startswith("first_year:") for error in errors)


def test_validator_flags_duplicate_and_missing_services(config: ReportingConfiguration) -> None:
    broken = config.model_copy(
        update={"services": ("Personal Care", "Personal Care", "Transport")}
    )

    errors = validate_reporting_configuration(broken, today=date(2025, 6, 15))

    assert any("duplicate service labels" in error for error in errors)
    assert any(error.startswith("information_service:") for error in errors)


def test_validator_flags_unknown_label_clash(config: ReportingConfiguration) -> None:
    labels = config.deprivation_categories.model_copy(update={"neither": "Unknown"})
    broken = config.model_copy(update={"deprivation_categories": labels})

    errors = validate_reporting_configuration(broken, today=date(2025, 6, 15))

    assert any("reserved for items without address data" in error for error in errors)


def test_validator_flags_statuses_that_are_all_receiving(
    config: ReportingConfiguration,
) -> None:
    settings = config.attendance_allowance.model_copy(update={"statuses": ("Low", "High")})
    broken = config.model_copy(update={"attendance_allowance": settings})

    errors = validate_reporting_configuration(broken, today=date(2025, 6, 15))

    assert any("attendance_allowance.receiving_statuses" in error for error in errors)


def test_main_reports_ok_for_bundled_configuration(capsys) -> None:
    load_reporting_configuration.cache_clear()

    assert validator.main([]) == 0
    assert "OK" in capsys.readouterr().out


def test_main_reports_load_failures(tmp_path, monkeypatch, capsys) -> None:
    broken = tmp_path / "reporting.yaml"
    broken.write_text("services: []\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(broken))
    load_reporting_configuration.cache_clear()

    try:
        assert validator.main([]) == 1
    finally:
        load_reporting_configuration.cache_clear()

    assert "failed to load configuration" in capsys.readouterr().out


def test_main_checks_each_given_file(tmp_path, capsys) -> None:
    site = tmp_path / "site.yaml"
    site.write_text("first_year: 2019\nservices: [Meals, Information]\n", encoding="utf-8")
    future = tmp_path / "future.yaml"
    future.write_text("first_year: 2030\nservices: [Meals, Information]\n", encoding="utf-8")

    assert validator.main([str(site), "--today", "2025-06-15"]) == 0
    assert validator.main([str(site), str(future), "--today", "2025-06-15"]) == 1

    output = capsys.readouterr().out
    assert "[site.yaml] OK (2 services from 2019)" in output
    assert "[future.yaml] 1 issue(s) detected:" in output


def test_main_falls_back_to_default_paths(tmp_path, capsys) -> None:
    missing = tmp_path / "missing.yaml"

    assert validator.main([], default_paths=[missing]) == 1
    assert "[missing.yaml] failed to load configuration" in capsys.readouterr().out
