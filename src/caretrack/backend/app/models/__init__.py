"""Typed inputs shared by the analytics services and routes.

Records consumed by the aggregators are frozen Pydantic models; the request
envelope accepted over HTTP lives in :mod:`.api`. Report outputs are plain
dataclasses owned by the services that build them.
"""

from .api import ReportRequest, format_validation_error
from .items import (
    OPEN,
    Address,
    AttendanceAllowanceRecord,
    ClientRecord,
    DeprivationFlags,
    EndDate,
    TimeBoundedItem,
    is_open_on,
    parse_clients,
    parse_items,
    resolve_end_date,
)

__all__ = [
    "OPEN",
    "Address",
    "AttendanceAllowanceRecord",
    "ClientRecord",
    "DeprivationFlags",
    "EndDate",
    "ReportRequest",
    "TimeBoundedItem",
    "format_validation_error",
    "is_open_on",
    "parse_clients",
    "parse_items",
    "resolve_end_date",
]
