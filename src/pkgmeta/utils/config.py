"""User settings stored in ~/.pkgmeta/config.json.

Recognized keys:

    aapt_path       aapt executable used when PKGMETA_AAPT is unset
    tool_timeout    seconds to wait for aapt (positive number)

A missing, unreadable or malformed file behaves like an empty one.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

CONFIG_FILE = Path.home() / ".pkgmeta" / "config.json"


@lru_cache(maxsize=1)
def load_config() -> dict[str, Any]:
    """Read the settings file once per process."""

    try:
        data = json.loads(CONFIG_FILE.read_text())
    except (OSError, ValueError):
        return {}

    return data if isinstance(data, dict) else {}


def get_aapt_path() -> str | None:
    """Return the configured aapt location, if it is a non-empty string."""

    value = load_config().get("aapt_path")
    if isinstance(value, str) and value:
        return value
    return None


def get_tool_timeout(default: float) -> float:
    """Return the configured badging tool timeout, or ``default``."""

    value = load_config().get("tool_timeout")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return default
    return float(value)
