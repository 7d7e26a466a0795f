"""Pydantic models for package metadata."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Platform(StrEnum):
    """Target operating system of a package."""

    ANDROID = "android"
    IOS = "ios"


class PackageFormat(StrEnum):
    """Supported package container formats."""

    APK = "apk"
    XAPK = "xapk"
    IPA = "ipa"

    @property
    def extension(self) -> str:
        """File suffix including the leading dot."""
        return f".{self.value}"

    @property
    def platform(self) -> Platform:
        """Platform the format belongs to."""
        return Platform.IOS if self is PackageFormat.IPA else Platform.ANDROID


class PackageMetadata(BaseModel):
    """Normalized metadata of a single package file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    icon: str
    """Icon as a base64 data URI (data:<media-type>;base64,...)."""

    name: str
    """Human-readable application name."""

    unique_identifier: str = Field(alias="uniqueIdentifier")
    """Package name or bundle identifier (e.g., com.example.app)."""

    version: str
    """User-facing version string (e.g., 1.2.0)."""

    build_number: str = Field(alias="buildNumber")
    """Version code or CFBundleVersion."""

    minimum_os_version: str = Field(alias="minimumOsVersion")
    """Minimum SDK level or minimum iOS version."""

    device_family: list[str] = Field(default_factory=list, alias="deviceFamily")
    """UIDeviceFamily codes for iOS; always empty for Android."""

    platform: Platform
    """Target platform."""
