"""Android SDK and bundled badging tool path detection."""

import os
import platform
from pathlib import Path

# Directory holding per-platform tool binaries shipped alongside the package.
BUNDLED_TOOLS_DIR = Path(__file__).resolve().parent.parent / "bin"


def aapt_executable_name(os_platform: str) -> str:
    """Return the aapt file name for a ``sys.platform`` value."""
    return "aapt.exe" if os_platform.startswith("win") else "aapt"


def bundled_aapt_path(os_platform: str, base_dir: Path = BUNDLED_TOOLS_DIR) -> Path:
    """Map a ``sys.platform`` value to the bundled aapt location.

    Pure function, the returned path is not checked for existence.

    Args:
        os_platform: Platform identifier such as ``linux``, ``darwin``
            or ``win32``.
        base_dir: Root of the bundled tools tree.

    Returns:
        Path of the form ``<base_dir>/<os_platform>/aapt[.exe]``.
    """
    return base_dir / os_platform / aapt_executable_name(os_platform)


def get_android_home() -> Path | None:
    """Get Android SDK root directory.

    Checks environment variables and common installation locations.

    Returns:
        Path to Android SDK root, or None if not found.
    """
    for env_var in ("ANDROID_HOME", "ANDROID_SDK_ROOT"):
        if value := os.environ.get(env_var):
            path = Path(value)
            if path.is_dir():
                return path

    system = platform.system()
    home = Path.home()

    common_locations: list[Path] = []
    if system == "Darwin":  # macOS
        common_locations = [
            home / "Library" / "Android" / "sdk",
            Path("/opt/android-sdk"),
        ]
    elif system == "Linux":
        common_locations = [
            home / "Android" / "Sdk",
            home / "android-sdk",
            Path("/opt/android-sdk"),
        ]
    elif system == "Windows":
        common_locations = [
            home / "AppData" / "Local" / "Android" / "Sdk",
            Path("C:/Android/sdk"),
        ]

    for location in common_locations:
        if location.is_dir():
            return location

    return None


def _version_key(name: str) -> tuple[int, ...] | None:
    try:
        return tuple(int(x) for x in name.split("."))
    except ValueError:
        return None


def find_sdk_aapt(os_platform: str) -> Path | None:
    """Find aapt in the newest Android SDK build-tools directory that has it.

    Args:
        os_platform: ``sys.platform`` value, selects the executable name.

    Returns:
        Path to the aapt executable, or None if no SDK copy exists.
    """
    android_home = get_android_home()
    if not android_home:
        return None

    build_tools_dir = android_home / "build-tools"
    if not build_tools_dir.is_dir():
        return None

    versions: list[tuple[tuple[int, ...], Path]] = []
    for version_dir in build_tools_dir.iterdir():
        if not version_dir.is_dir():
            continue
        key = _version_key(version_dir.name)
        if key is None:
            # Skip non-version directories
            continue
        versions.append((key, version_dir))

    # Newest first
    versions.sort(reverse=True)
    for _, version_dir in versions:
        aapt = version_dir / aapt_executable_name(os_platform)
        if aapt.is_file():
            return aapt

    return None
