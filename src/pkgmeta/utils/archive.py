"""Zip entry extraction for package containers."""

import re
from pathlib import Path
from zipfile import BadZipFile, ZipFile, ZipInfo

from pkgmeta.exceptions import DataExtractionError


def _open(archive_path: Path) -> ZipFile:
    try:
        return ZipFile(archive_path, "r")
    except BadZipFile as e:
        raise DataExtractionError(
            "archive", f"Not a valid ZIP container: {archive_path} ({e})"
        ) from e
    except OSError as e:
        raise DataExtractionError(
            "archive", f"Failed to open {archive_path}: {e}"
        ) from e


def _read(archive: ZipFile, info: ZipInfo, archive_path: Path) -> bytes:
    try:
        return archive.read(info)
    except (BadZipFile, OSError, RuntimeError) as e:
        raise DataExtractionError(
            "archive", f"Failed to read {info.filename} from {archive_path}: {e}"
        ) from e


def read_entry(archive_path: Path, name: str) -> bytes:
    """Read a single entry by exact name.

    Raises:
        DataExtractionError: If the archive is unreadable or has no such entry.
    """
    with _open(archive_path) as archive:
        try:
            info = archive.getinfo(name)
        except KeyError:
            raise DataExtractionError(
                "archive", f"Entry not found in {archive_path.name}: {name}"
            ) from None
        return _read(archive, info, archive_path)


def read_matching_entry(
    archive_path: Path,
    pattern: str | re.Pattern[str],
    *,
    unique: bool = False,
    prefer_largest: bool = False,
) -> tuple[str, bytes]:
    """Read the entry matching ``pattern``.

    Args:
        archive_path: Zip container to read from.
        pattern: Regular expression matched against the full entry name.
        unique: If True, more than one match is an error.
        prefer_largest: If True, pick the largest match instead of the first.

    Returns:
        Tuple of (entry name, raw bytes).

    Raises:
        DataExtractionError: If nothing matches, or several match with
            ``unique`` set.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    with _open(archive_path) as archive:
        matches = [
            info
            for info in archive.infolist()
            if not info.is_dir() and regex.fullmatch(info.filename)
        ]
        if not matches:
            raise DataExtractionError(
                "archive",
                f"No entry matching {regex.pattern!r} in {archive_path.name}",
            )
        if unique and len(matches) > 1:
            names = ", ".join(info.filename for info in matches)
            raise DataExtractionError(
                "archive",
                f"Ambiguous entries matching {regex.pattern!r}: {names}",
            )

        chosen = matches[0]
        if prefer_largest:
            chosen = max(matches, key=lambda info: info.file_size)
        return chosen.filename, _read(archive, chosen, archive_path)
