"""aapt badging invocation and output parsing."""

import re
from dataclasses import dataclass
from pathlib import Path

from pkgmeta.exceptions import DataExtractionError, ToolInvocationError
from pkgmeta.utils.process import DEFAULT_TIMEOUT, run_tool

PACKAGE_PATTERN = re.compile(
    r"package: name='(.*?)' versionCode='(.*?)' versionName='(.*?)'"
)
SDK_VERSION_PATTERN = re.compile(r"sdkVersion:'(.*?)'")
APPLICATION_PATTERN = re.compile(r"application: label='(.*?)' icon='(.*?)'")


@dataclass(frozen=True)
class PackageLine:
    package_name: str
    version_code: str
    version_name: str


@dataclass(frozen=True)
class ApplicationLine:
    label: str
    icon_path: str


@dataclass(frozen=True)
class Badging:
    """Fields recovered from ``aapt dump badging`` output."""

    package: PackageLine
    sdk_version: str
    application: ApplicationLine


def run_badging(
    aapt: Path | str, apk_path: Path, timeout: float | None = DEFAULT_TIMEOUT
) -> tuple[str, str]:
    """Run ``aapt dump badging`` and return its (stdout, stderr).

    Raises:
        ToolInvocationError: If aapt fails, times out, or writes anything
            to stderr (aapt reports malformed resources there).
    """
    cmd = [str(aapt), "dump", "badging", str(apk_path)]
    result = run_tool(cmd, check=True, timeout=timeout)
    if result.stderr.strip():
        raise ToolInvocationError(result.stderr.strip(), cmd)
    return result.stdout, result.stderr


def _search(pattern: re.Pattern[str], output: str, stage: str) -> re.Match[str]:
    match = pattern.search(output)
    if match is None:
        raise DataExtractionError(
            stage, f"Pattern {pattern.pattern!r} not found in badging output"
        )
    return match


def parse_package(output: str) -> PackageLine:
    """Parse the ``package:`` line (name, versionCode, versionName)."""
    match = _search(PACKAGE_PATTERN, output, "package")
    return PackageLine(*match.groups())


def parse_sdk_version(output: str) -> str:
    """Parse the ``sdkVersion:`` line."""
    return _search(SDK_VERSION_PATTERN, output, "sdkVersion").group(1)


def parse_application(output: str) -> ApplicationLine:
    """Parse the ``application:`` line (label, icon path)."""
    match = _search(APPLICATION_PATTERN, output, "application")
    return ApplicationLine(*match.groups())


def parse_badging(output: str) -> Badging:
    """Run the three badging extraction steps in order.

    Raises:
        DataExtractionError: Naming the first step whose line is missing.
    """
    return Badging(
        package=parse_package(output),
        sdk_version=parse_sdk_version(output),
        application=parse_application(output),
    )
