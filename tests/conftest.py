"""Test configuration utilities and shared fixtures."""

import sys
from datetime import date
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from caretrack.backend.app import create_app  # noqa: E402
from caretrack.backend.config.reporting_config import (  # noqa: E402
    ReportingConfiguration,
    load_reporting_configuration,
)

TODAY = date(2025, 6, 15)


@pytest.fixture()
def today() -> date:
    """Fixed reference date so reports do not depend on the wall clock."""

    return TODAY


@pytest.fixture()
def config() -> ReportingConfiguration:
    """Return the bundled reporting vocabulary."""

    load_reporting_configuration.cache_clear()
    return load_reporting_configuration()


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
