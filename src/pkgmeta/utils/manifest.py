"""Decoding of JSON and property list manifests."""

import json
import plistlib
from enum import StrEnum
from typing import Any
from xml.parsers.expat import ExpatError

from pkgmeta.exceptions import DecodeError, UnsupportedFormatError

BINARY_PLIST_MAGIC = b"bplist"
XML_PLIST_MAGIC = b"<?xml"


class ManifestFormat(StrEnum):
    """Serialization of a package manifest."""

    JSON = "json"
    BINARY_PLIST = "binary-plist"
    XML_PLIST = "xml-plist"


def sniff_plist_format(data: bytes, source: str = "Info.plist") -> ManifestFormat:
    """Identify a property list by its leading bytes.

    Raises:
        UnsupportedFormatError: If the data is neither binary nor XML plist.
    """
    if data.startswith(BINARY_PLIST_MAGIC):
        return ManifestFormat.BINARY_PLIST
    # Tolerate a UTF-8 byte order mark before the XML declaration.
    if data.removeprefix(b"\xef\xbb\xbf").lstrip().startswith(XML_PLIST_MAGIC):
        return ManifestFormat.XML_PLIST
    raise UnsupportedFormatError(source, f"unrecognised signature {data[:8]!r}")


def decode_manifest(
    data: bytes, fmt: ManifestFormat, stage: str = "manifest"
) -> dict[str, Any]:
    """Decode manifest bytes into a key-value tree.

    Args:
        data: Raw manifest bytes.
        fmt: Declared serialization.
        stage: Name reported in errors.

    Returns:
        The decoded top-level dictionary.

    Raises:
        DecodeError: If the data is malformed or not a dictionary.
    """
    try:
        if fmt is ManifestFormat.JSON:
            tree = json.loads(data.decode("utf-8-sig"))
        elif fmt is ManifestFormat.BINARY_PLIST:
            tree = plistlib.loads(data, fmt=plistlib.FMT_BINARY)
        else:
            tree = plistlib.loads(data, fmt=plistlib.FMT_XML)
    except (ValueError, ExpatError) as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors too
        raise DecodeError(stage, f"Malformed {fmt.value} document: {e}") from e

    if not isinstance(tree, dict):
        raise DecodeError(
            stage, f"Expected a {fmt.value} dictionary, got {type(tree).__name__}"
        )
    return tree


def decode_plist(data: bytes, stage: str = "Info.plist") -> dict[str, Any]:
    """Sniff and decode a binary or XML property list."""
    return decode_manifest(data, sniff_plist_format(data, stage), stage)


def as_text(value: Any) -> str:
    """Render a manifest scalar as a string, None becomes ''."""
    if value is None:
        return ""
    return str(value)
