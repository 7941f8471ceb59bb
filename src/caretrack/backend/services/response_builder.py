"""Utilities for serialising report responses."""

from __future__ import annotations

from typing import Any, Protocol, Tuple

from flask import jsonify

ResponseTuple = Tuple[Any, int]


class SerialisableReport(Protocol):
    def as_dict(self) -> dict[str, Any]: ...


def build_report_response(report: SerialisableReport) -> ResponseTuple:
    """Return a Flask JSON response for ``report``."""

    return jsonify(report.as_dict()), 200
