"""Rich console helpers for terminal output."""

from typing import Any

from rich.console import Console as RichConsole
from rich.markup import escape


class Console:
    """Wrapper around rich.Console with convenience methods."""

    def __init__(self) -> None:
        self._console = RichConsole()
        self._err_console = RichConsole(stderr=True)
        self._json_mode = False

    def set_json_mode(self, enabled: bool) -> None:
        """Enable or disable JSON mode (suppresses rich output)."""
        self._json_mode = enabled

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (suppressed in JSON mode)."""
        if not self._json_mode:
            self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print an error message in red to stderr (shown in JSON mode too)."""
        self._err_console.print(f"[red]✗[/red] {escape(message)}", highlight=False)


# Global console instance
console = Console()
