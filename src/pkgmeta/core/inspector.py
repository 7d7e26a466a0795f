"""Format dispatch: one entry point for every supported package type."""

from pathlib import Path

from pkgmeta.core.android import ApkExtractor, XapkExtractor
from pkgmeta.core.detector import detect_format
from pkgmeta.core.ios import IpaExtractor
from pkgmeta.models.metadata import PackageFormat, PackageMetadata


class PackageInspector:
    """Extract normalized metadata from .apk, .xapk and .ipa files."""

    def __init__(
        self,
        aapt_path: Path | str | None = None,
        timeout: float | None = None,
    ):
        """Initialize package inspector.

        Args:
            aapt_path: aapt executable used for .apk files. When None the
                PKGMETA_AAPT / config / bundled / SDK / PATH lookup applies.
            timeout: Seconds to wait for aapt. Defaults to the configured
                ``tool_timeout`` or 60 seconds.
        """
        self.aapt_path = Path(aapt_path) if aapt_path else None
        self.timeout = timeout

    def _extractor(
        self, fmt: PackageFormat, path: Path
    ) -> ApkExtractor | XapkExtractor | IpaExtractor:
        match fmt:
            case PackageFormat.APK:
                return ApkExtractor(path, self.aapt_path, self.timeout)
            case PackageFormat.XAPK:
                return XapkExtractor(path)
            case PackageFormat.IPA:
                return IpaExtractor(path)

    def extract(self, path: Path | str) -> PackageMetadata:
        """Extract metadata from a package file.

        The format is chosen from the extension before the file is touched.
        The first failure is raised as is; nothing partial is returned.

        Args:
            path: Path to an .apk, .xapk or .ipa file.

        Returns:
            PackageMetadata with every field populated.

        Raises:
            UnsupportedFormatError: Unknown extension or Info.plist signature.
            ToolInvocationError: aapt missing, failing or timing out.
            DataExtractionError: Missing badging line, field or archive entry.
            DecodeError: Malformed manifest, property list or icon.
        """
        path = Path(path)
        fmt = detect_format(path)
        return self._extractor(fmt, path).extract()


def extract(
    path: Path | str,
    aapt_path: Path | str | None = None,
    *,
    timeout: float | None = None,
) -> PackageMetadata:
    """Extract metadata from a package file (see PackageInspector.extract)."""
    return PackageInspector(aapt_path, timeout=timeout).extract(path)
