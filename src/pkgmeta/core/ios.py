"""Metadata extraction for iOS application archives (.ipa)."""

import re
from pathlib import Path, PurePosixPath
from typing import Any

from pkgmeta.exceptions import DataExtractionError
from pkgmeta.models.metadata import PackageMetadata, Platform
from pkgmeta.utils.archive import read_matching_entry
from pkgmeta.utils.icon import cgbi_to_png, to_data_uri
from pkgmeta.utils.manifest import as_text, decode_plist

INFO_PLIST_PATTERN = re.compile(r"Payload/[^/]+/Info\.plist")
FALLBACK_ICON_PATTERN = re.compile(r"Payload/[^/]+/Icon\.png")


def primary_icon_name(info: dict[str, Any]) -> str | None:
    """Return the last CFBundleIconFiles entry of the primary icon, if any.

    Later entries conventionally name higher resolution artwork.
    """
    icons = info.get("CFBundleIcons")
    if not isinstance(icons, dict):
        return None
    primary = icons.get("CFBundlePrimaryIcon")
    if not isinstance(primary, dict):
        return None
    files = primary.get("CFBundleIconFiles")
    if not isinstance(files, list) or not files:
        return None
    return as_text(files[-1]) or None


def icon_pattern(bundle_dir: str, base_name: str) -> re.Pattern[str]:
    """Build a pattern matching every scale/idiom variant of an icon."""
    stem = base_name.removesuffix(".png")
    return re.compile(
        re.escape(f"{bundle_dir}/{stem}") + r"(?:@\d+x)?(?:~ipad|~iphone)?\.png"
    )


def device_family(info: dict[str, Any]) -> list[str]:
    """UIDeviceFamily codes as strings, in source order."""
    family = info.get("UIDeviceFamily")
    if family is None:
        return []
    if not isinstance(family, list):
        family = [family]
    return [as_text(code) for code in family]


class IpaExtractor:
    """Extract metadata from an IPA's Info.plist and app icon."""

    def __init__(self, ipa_path: Path):
        self.ipa_path = ipa_path

    def _read_info(self) -> tuple[str, dict[str, Any]]:
        """Locate and decode the single bundle Info.plist.

        Returns:
            Tuple of (bundle directory inside the archive, decoded plist).
        """
        entry, raw = read_matching_entry(
            self.ipa_path, INFO_PLIST_PATTERN, unique=True
        )
        return str(PurePosixPath(entry).parent), decode_plist(raw)

    def _read_icon(self, bundle_dir: str, info: dict[str, Any]) -> bytes:
        base_name = primary_icon_name(info)
        if base_name:
            pattern = icon_pattern(bundle_dir, base_name)
        else:
            pattern = FALLBACK_ICON_PATTERN
        _, raw = read_matching_entry(self.ipa_path, pattern, prefer_largest=True)
        return cgbi_to_png(raw)

    def extract(self) -> PackageMetadata:
        bundle_dir, info = self._read_info()

        identifier = as_text(info.get("CFBundleIdentifier"))
        if not identifier:
            raise DataExtractionError(
                "Info.plist", "Info.plist has no CFBundleIdentifier"
            )

        icon = self._read_icon(bundle_dir, info)
        build_number = as_text(info.get("CFBundleVersion"))

        return PackageMetadata(
            icon=to_data_uri(icon, "icon.png"),
            name=as_text(info.get("CFBundleDisplayName") or info.get("CFBundleName")),
            unique_identifier=identifier,
            version=as_text(info.get("CFBundleShortVersionString")) or build_number,
            build_number=build_number,
            minimum_os_version=as_text(info.get("MinimumOSVersion")),
            device_family=device_family(info),
            platform=Platform.IOS,
        )
