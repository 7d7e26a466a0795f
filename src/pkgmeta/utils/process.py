"""Subprocess wrapper for external tool invocations."""

import subprocess
from dataclasses import dataclass

from pkgmeta.exceptions import ToolInvocationError

# A hung badging tool must never block an extraction forever.
DEFAULT_TIMEOUT = 60.0


@dataclass
class ProcessResult:
    """Result of a subprocess execution."""

    command: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        """Check if the command succeeded."""
        return self.returncode == 0


def run_tool(
    command: list[str],
    *,
    check: bool = True,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> ProcessResult:
    """Run an external tool command and capture its output.

    Args:
        command: Command and arguments to run.
        check: If True, raise ToolInvocationError on non-zero exit.
        timeout: Timeout in seconds, None waits forever.

    Returns:
        ProcessResult with captured stdout and stderr.

    Raises:
        ToolInvocationError: On timeout, missing executable, or (with
            check=True) a non-zero exit status.
    """
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ToolInvocationError(
            f"Command timed out after {timeout}s", command
        ) from e
    except FileNotFoundError as e:
        raise ToolInvocationError(f"Command not found: {command[0]}", command) from e
    except PermissionError as e:
        raise ToolInvocationError(
            f"Command is not executable: {command[0]}", command
        ) from e

    proc_result = ProcessResult(
        command=command,
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
    )

    if check and not proc_result.success:
        raise ToolInvocationError(
            f"exit {result.returncode}: {proc_result.stderr.strip()}", command
        )

    return proc_result
