"""Request and response helpers for the CareTrack HTTP layer."""

from .request_parser import parse_report_payload
from .response_builder import build_report_response

__all__ = [
    "build_report_response",
    "parse_report_payload",
]
