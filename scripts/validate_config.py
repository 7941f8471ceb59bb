#!/usr/bin/env python3
"""Check the bundled reporting vocabulary and any deployment override.

Usage::

    scripts/validate_config.py                    # bundled file and $CARETRACK_REPORTING_CONFIG
    scripts/validate_config.py site.yaml --today 2025-06-15
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from caretrack.backend.config.reporting_config import CONFIG_FILE, CONFIG_PATH_ENV  # noqa: E402
from caretrack.backend.config.validator import main  # noqa: E402


def default_targets() -> list[Path]:
    """Return the bundled file plus the override a deployment would load instead."""

    targets = [CONFIG_FILE]
    override = os.getenv(CONFIG_PATH_ENV, "").strip()
    if override:
        path = Path(override).expanduser()
        if path.resolve() != CONFIG_FILE:
            targets.append(path)
    return targets


if __name__ == "__main__":
    raise SystemExit(main(default_paths=default_targets()))
