"""Typed exception hierarchy for pkgmeta."""

from pathlib import Path


class PkgmetaError(Exception):
    """Base exception for all pkgmeta errors."""

    pass


class UnsupportedFormatError(PkgmetaError):
    """Raised for unknown package extensions or unrecognised plist data."""

    def __init__(self, path: Path | str, reason: str | None = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Unsupported file format: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ToolInvocationError(PkgmetaError):
    """Raised when the badging tool fails or reports diagnostics."""

    def __init__(self, message: str, command: list[str] | None = None):
        self.command = command or []
        if command:
            message = f"Command failed: {' '.join(command)}\n{message}"
        super().__init__(message)


class ToolNotFoundError(ToolInvocationError):
    """Raised when a required external tool cannot be located."""

    def __init__(self, tool: str, install_hint: str | None = None):
        self.tool = tool
        self.install_hint = install_hint
        message = f"Required tool not found: {tool}"
        if install_hint:
            message += f"\nInstall: {install_hint}"
        super().__init__(message)


class DataExtractionError(PkgmetaError):
    """Raised when an expected pattern, field or archive entry is missing."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"[{stage}] {message}")


class DecodeError(PkgmetaError):
    """Raised when a JSON or property list document is malformed."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"[{stage}] {message}")
