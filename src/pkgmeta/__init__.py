"""Extract name, version and icon metadata from .apk, .xapk and .ipa files."""

from pkgmeta.core.inspector import PackageInspector, extract
from pkgmeta.models.metadata import PackageFormat, PackageMetadata, Platform

__version__ = "0.1.0"

__all__ = [
    "PackageFormat",
    "PackageInspector",
    "PackageMetadata",
    "Platform",
    "__version__",
    "extract",
]
