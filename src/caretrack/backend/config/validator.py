"""Utilities for validating the reporting configuration and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Sequence

from .reporting_config import (
    AttendanceAllowanceConfig,
    ConfigurationError,
    DeprivationCategoryLabels,
    ReportingConfiguration,
    configuration_path,
    read_reporting_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_services(config: ReportingConfiguration) -> list[str]:
    errors: list[str] = []
    services = list(config.services)

    duplicates = [name for name, count in Counter(services).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope("services", f"duplicate service labels detected: {sorted(duplicates)}")
        )

    if config.information_service not in services:
        errors.append(
            _format_scope(
                "information_service",
                f"'{config.information_service}' is not a configured service",
            )
        )

    if config.unknown_label in services:
        errors.append(
            _format_scope(
                "unknown_label",
                f"'{config.unknown_label}' clashes with a configured service",
            )
        )

    return errors


def _validate_deprivation(labels: DeprivationCategoryLabels, unknown_label: str) -> list[str]:
    errors: list[str] = []
    duplicates = [name for name, count in Counter(labels.labels).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "deprivation_categories",
                f"category labels must be distinct: {sorted(duplicates)}",
            )
        )
    if unknown_label in labels.labels:
        errors.append(
            _format_scope(
                "deprivation_categories",
                f"'{unknown_label}' is reserved for items without address data",
            )
        )
    return errors


def _validate_attendance_allowance(config: AttendanceAllowanceConfig) -> list[str]:
    errors: list[str] = []
    duplicates = [name for name, count in Counter(config.statuses).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "attendance_allowance.statuses",
                f"duplicate statuses detected: {sorted(duplicates)}",
            )
        )
    if len(config.receiving_statuses) == len(config.statuses):
        errors.append(
            _format_scope(
                "attendance_allowance.receiving_statuses",
                "every status counts as receiving; requested-only claims cannot be reported",
            )
        )
    return errors


def validate_reporting_configuration(
    config: ReportingConfiguration, *, today: date | None = None
) -> list[str]:
    """Return a list of human-readable issues for ``config``."""

    current = today or date.today()
    errors: list[str] = []

    if config.first_year > current.year:
        errors.append(
            _format_scope(
                "first_year",
                f"{config.first_year} is after the current year {current.year}",
            )
        )

    errors.extend(_validate_services(config))
    errors.extend(_validate_deprivation(config.deprivation_categories, config.unknown_label))
    errors.extend(_validate_attendance_allowance(config.attendance_allowance))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the reporting configuration and list issues for contributors."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Configuration files to check (defaults to the one currently in effect).",
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Reference date (YYYY-MM-DD) for the first-year check.",
    )
    return parser


def _check_file(path: Path, today: date | None) -> bool:
    try:
        config = read_reporting_configuration(path)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[{path.name}] failed to load configuration: {error}")
        return False

    issues = validate_reporting_configuration(config, today=today)
    if issues:
        print(f"[{path.name}] {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return False

    print(f"[{path.name}] OK ({len(config.services)} services from {config.first_year})")
    return True


def main(
    argv: Sequence[str] | None = None, *, default_paths: Sequence[Path] | None = None
) -> int:
    """Entry point for running validations from the command line.

    Without explicit paths the files in ``default_paths`` are checked, falling
    back to the configuration currently in effect.
    """

    args = _build_argument_parser().parse_args(argv)
    paths = args.paths or list(default_paths or [configuration_path()])
    results = [_check_file(path, args.today) for path in paths]
    return 0 if all(results) else 1


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
