"""Package format detection by file extension."""

from pathlib import Path

from pkgmeta.exceptions import UnsupportedFormatError
from pkgmeta.models.metadata import PackageFormat

SUPPORTED_EXTENSIONS: dict[str, PackageFormat] = {
    fmt.extension: fmt for fmt in PackageFormat
}


def detect_format(path: Path | str) -> PackageFormat:
    """Map a file path to its package format.

    Only the extension is inspected, case-insensitively; the file is never
    opened.

    Raises:
        UnsupportedFormatError: If the extension is missing or unknown.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    try:
        return SUPPORTED_EXTENSIONS[suffix]
    except KeyError:
        reason = f"extension {suffix!r}" if suffix else "no extension"
        raise UnsupportedFormatError(path, reason) from None
