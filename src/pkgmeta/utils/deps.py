"""Badging tool resolution."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path
from typing import Final

from pkgmeta.exceptions import ToolNotFoundError
from pkgmeta.utils.android_sdk import bundled_aapt_path, find_sdk_aapt
from pkgmeta.utils.config import get_aapt_path

AAPT_ENV_VAR: Final[str] = "PKGMETA_AAPT"
AAPT_INSTALL_HINT: Final[str] = (
    "Part of Android SDK build-tools (set ANDROID_HOME), or set PKGMETA_AAPT, "
    "configure ~/.pkgmeta/config.json (aapt_path), or pass --aapt"
)


def _existing_file(raw_value: str | None) -> Path | None:
    if not raw_value:
        return None

    candidate = Path(raw_value).expanduser()
    if candidate.is_file():
        return candidate

    return None


def resolve_aapt(os_platform: str | None = None) -> Path:
    """Locate the aapt executable when the caller did not pass one.

    Lookup order: ``PKGMETA_AAPT``, the ``aapt_path`` config key, the
    bundled per-platform binary, the Android SDK build-tools, then PATH.

    Args:
        os_platform: ``sys.platform`` style identifier, defaults to the
            running interpreter's platform.

    Returns:
        Path to an existing aapt executable.

    Raises:
        ToolNotFoundError: If no candidate exists.
    """
    os_platform = os_platform or sys.platform

    aapt = _existing_file(os.environ.get(AAPT_ENV_VAR))
    if aapt is not None:
        return aapt

    aapt = _existing_file(get_aapt_path())
    if aapt is not None:
        return aapt

    bundled = bundled_aapt_path(os_platform)
    if bundled.is_file():
        return bundled

    sdk_aapt = find_sdk_aapt(os_platform)
    if sdk_aapt is not None:
        return sdk_aapt

    on_path = shutil.which("aapt")
    if on_path:
        return Path(on_path)

    raise ToolNotFoundError("aapt", AAPT_INSTALL_HINT)
