#!/usr/bin/env python3
"""Time report generation over a synthetic caseload."""

from __future__ import annotations

import json
import os
import random
import sys
from datetime import date, timedelta
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from caretrack.backend.app.models import (  # noqa: E402
    Address,
    AttendanceAllowanceRecord,
    ClientRecord,
    DeprivationFlags,
    TimeBoundedItem,
)
from caretrack.backend.app.services import InMemoryItemSource, ReportService  # noqa: E402
from caretrack.backend.config.reporting_config import load_reporting_configuration  # noqa: E402

LOCALITIES = ("Wiveliscombe", "Milverton", "Bishops Lydeard", "Dulverton", None)


def synthetic_items(count: int, *, first_year: int, rng: random.Random) -> list[TimeBoundedItem]:
    services = list(load_reporting_configuration().services) + ["Gardening"]
    today = date.today()
    span = (today - date(first_year, 1, 1)).days
    items = []
    for index in range(count):
        start = date(first_year, 1, 1) + timedelta(days=rng.randrange(span))
        end = "open" if rng.random() < 0.3 else start + timedelta(days=rng.randrange(1, 720))
        items.append(
            TimeBoundedItem(
                id=f"item-{index}",
                start_date=start,
                end_date=end,
                weekly_hours=round(rng.uniform(0, 20), 1),
                one_off_start_date_hours=rng.choice((0, 0, 0, 2.5)),
                services=tuple(rng.sample(services, k=rng.randint(1, 3))),
                address=Address(
                    locality=rng.choice(LOCALITIES),
                    deprivation=DeprivationFlags(
                        income=rng.random() < 0.3, health=rng.random() < 0.3
                    ),
                ),
                carer_id=f"carer-{rng.randrange(25)}",
            )
        )
    return items


def synthetic_clients(count: int, *, first_year: int, rng: random.Random) -> list[ClientRecord]:
    today = date.today()
    span = (today - date(first_year, 1, 1)).days
    clients = []
    for index in range(count):
        requested = date(first_year, 1, 1) + timedelta(days=rng.randrange(span))
        confirmed = requested + timedelta(days=rng.randrange(20, 120))
        clients.append(
            ClientRecord(
                id=f"client-{index}",
                attendance_allowance=AttendanceAllowanceRecord(
                    status=rng.choice(("Unsent", "Pending", "Low", "High")),
                    requested_level=rng.choice(("Low", "High")),
                    requested_date=requested,
                    confirmation_date=confirmed if confirmed <= today else None,
                    hours_to_complete_request=rng.choice((1, 1.5, 2)),
                    completed_by=f"carer-{rng.randrange(25)}",
                ),
            )
        )
    return clients


def measure(iterations: int, item_count: int) -> dict[str, dict[str, float]]:
    """Return timing statistics for each report family."""

    config = load_reporting_configuration()
    rng = random.Random(20170101)
    items = synthetic_items(item_count, first_year=config.first_year, rng=rng)
    source = InMemoryItemSource(
        requests=items,
        packages=items,
        clients=synthetic_clients(item_count, first_year=config.first_year, rng=rng),
        coordinator_ids={f"carer-{index}" for index in range(5)},
    )
    service = ReportService(source, config=config)

    reports = {
        "requests_report": service.generate_requests_report,
        "packages_deprivation_report": service.generate_packages_deprivation_report,
        "active_packages_cross_section": service.generate_active_packages_cross_section,
        "attendance_allowance_report": service.generate_attendance_allowance_report,
    }
    results = {}
    for name, generate in reports.items():
        generate()  # Warm caches
        start = perf_counter()
        for _ in range(iterations):
            generate()
        elapsed = perf_counter() - start
        results[name] = {
            "iterations": iterations,
            "total_ms": elapsed * 1000,
            "average_ms": (elapsed / iterations) * 1000,
        }
    return results


def main() -> None:
    iterations = int(os.getenv("CARETRACK_PROFILE_ITERATIONS", "10"))
    item_count = int(os.getenv("CARETRACK_PROFILE_ITEMS", "2000"))
    print(json.dumps(measure(iterations, item_count), indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
