"""Tests for loading the reporting vocabulary."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from caretrack.backend.config.reporting_config import (
    CONFIG_PATH_ENV,
    ConfigurationError,
    DeprivationCategoryLabels,
    ReportingConfiguration,
    load_reporting_configuration,
)


@pytest.fixture()
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    path = tmp_path / "reporting.yaml"
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
    load_reporting_configuration.cache_clear()
    yield path
    load_reporting_configuration.cache_clear()


def test_bundled_configuration_lists_services(config: ReportingConfiguration) -> None:
    assert config.first_year == 2017
    assert "Personal Care" in config.services
    assert config.information_service in config.services
    assert config.other_service == "Other"
    assert config.is_recognised_service("Transport")
    assert not config.is_recognised_service("Gardening")


def test_configuration_is_cached(config: ReportingConfiguration) -> None:
    assert load_reporting_configuration() is config


def test_environment_override_is_honoured(config_file: Path) -> None:
    config_file.write_text(
        "first_year: 2020\nservices: [Meals, Information]\n", encoding="utf-8"
    )

    config = load_reporting_configuration()

    assert config.first_year == 2020
    assert tuple(config.services) == ("Meals", "Information")
    assert config.deprivation_categories == DeprivationCategoryLabels()


def test_missing_file_raises(config_file: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_reporting_configuration()


def test_malformed_yaml_raises_configuration_error(config_file: Path) -> None:
    config_file.write_text("services: [Meals\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Unable to parse"):
        load_reporting_configuration()


def test_top_level_must_be_mapping(config_file: Path) -> None:
    config_file.write_text("- Meals\n- Transport\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="mapping"):
        load_reporting_configuration()


@pytest.mark.parametrize(
    "content",
    [
        "services: []\n",
        "services: [Meals, Other]\n",
        "services: [Meals]\nfirst_year: 1850\n",
        "services: [Meals]\nattendance_allowance:\n  receiving_statuses: [Granted]\n",
        "services: [Meals]\nunexpected: true\n",
    ],
)
def test_schema_violations_raise_configuration_error(config_file: Path, content: str) -> None:
    config_file.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError, match="validation failed"):
        load_reporting_configuration()


def test_deprivation_labels_cover_each_combination() -> None:
    labels = DeprivationCategoryLabels()

    assert labels.label_for(income=True, health=True) == "Health & Income"
    assert labels.label_for(income=False, health=True) == "Health Only"
    assert labels.label_for(income=True, health=False) == "Income Only"
    assert labels.label_for(income=False, health=False) == "Neither"
