"""Metadata extraction for Android packages (.apk, .xapk)."""

from pathlib import Path
from typing import Any

from pkgmeta.core.badging import parse_badging, run_badging
from pkgmeta.exceptions import DataExtractionError
from pkgmeta.models.metadata import PackageMetadata, Platform
from pkgmeta.utils.archive import read_entry
from pkgmeta.utils.config import get_tool_timeout
from pkgmeta.utils.deps import resolve_aapt
from pkgmeta.utils.icon import to_data_uri
from pkgmeta.utils.manifest import ManifestFormat, as_text, decode_manifest
from pkgmeta.utils.process import DEFAULT_TIMEOUT


class ApkExtractor:
    """Extract metadata from an APK using ``aapt dump badging``."""

    def __init__(
        self,
        apk_path: Path,
        aapt_path: Path | None = None,
        timeout: float | None = None,
    ):
        """Initialize APK extractor.

        Args:
            apk_path: Path to the APK file.
            aapt_path: aapt executable. Resolved via the lookup chain if None.
            timeout: Seconds to wait for aapt before giving up. Read from the
                ``tool_timeout`` config key, or 60 seconds, when None.
        """
        self.apk_path = apk_path
        self.aapt_path = aapt_path
        self.timeout = timeout

    def extract(self) -> PackageMetadata:
        aapt = self.aapt_path or resolve_aapt()
        timeout = self.timeout
        if timeout is None:
            timeout = get_tool_timeout(DEFAULT_TIMEOUT)
        stdout, _ = run_badging(aapt, self.apk_path, timeout=timeout)
        badging = parse_badging(stdout)

        icon_path = badging.application.icon_path
        if not icon_path:
            raise DataExtractionError("application", "Badging output has no icon")
        icon = read_entry(self.apk_path, icon_path)

        return PackageMetadata(
            icon=to_data_uri(icon, icon_path),
            name=badging.application.label,
            unique_identifier=badging.package.package_name,
            version=badging.package.version_name,
            build_number=badging.package.version_code,
            minimum_os_version=badging.sdk_version,
            platform=Platform.ANDROID,
        )


class XapkExtractor:
    """Extract metadata from an XAPK's manifest.json and icon.png."""

    MANIFEST_ENTRY = "manifest.json"
    ICON_ENTRY = "icon.png"

    def __init__(self, xapk_path: Path):
        self.xapk_path = xapk_path

    def _read_manifest(self) -> dict[str, Any]:
        raw = read_entry(self.xapk_path, self.MANIFEST_ENTRY)
        return decode_manifest(raw, ManifestFormat.JSON, stage=self.MANIFEST_ENTRY)

    def extract(self) -> PackageMetadata:
        manifest = self._read_manifest()

        package_name = as_text(manifest.get("package_name"))
        if not package_name:
            raise DataExtractionError(
                self.MANIFEST_ENTRY, "Manifest has no 'package_name' field"
            )

        icon = read_entry(self.xapk_path, self.ICON_ENTRY)

        return PackageMetadata(
            icon=to_data_uri(icon, self.ICON_ENTRY),
            name=as_text(manifest.get("name")),
            unique_identifier=package_name,
            version=as_text(manifest.get("version_name")),
            build_number=as_text(manifest.get("version_code")),
            minimum_os_version=as_text(manifest.get("min_sdk_version")),
            platform=Platform.ANDROID,
        )
