"""Configuration loader wrapping the reporting schema models."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    AttendanceAllowanceConfig,
    ConfigurationError,
    DeprivationCategoryLabels,
    ReportingConfiguration,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
CONFIG_FILE = CONFIG_DIRECTORY / "reporting.yaml"
CONFIG_PATH_ENV = "CARETRACK_REPORTING_CONFIG"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise ConfigurationError(f"Unable to parse {path.name}: {error}") from error
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def configuration_path() -> Path:
    """Return the configuration file in effect, honouring the environment override."""

    override = os.getenv(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def read_reporting_configuration(path: Path) -> ReportingConfiguration:
    """Read and validate the reporting vocabulary stored at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Reporting configuration missing: {path}")

    raw_config = _load_yaml(path)

    try:
        return ReportingConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Configuration validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_reporting_configuration() -> ReportingConfiguration:
    """Load and cache the reporting vocabulary in effect."""

    return read_reporting_configuration(configuration_path())


__all__ = [
    "AttendanceAllowanceConfig",
    "CONFIG_DIRECTORY",
    "CONFIG_FILE",
    "CONFIG_PATH_ENV",
    "ConfigurationError",
    "DeprivationCategoryLabels",
    "ReportingConfiguration",
    "configuration_path",
    "load_reporting_configuration",
    "read_reporting_configuration",
]
