"""Rich logging facade for the lite-cli tools.

Renderers write payloads (tables, csv, json) to stdout themselves; everything
printed through :class:`Logger` goes to stderr so piped output stays clean.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme
from rich.traceback import install

install(show_locals=False)

_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "debug": "dim",
        "dry_run": "bold cyan",
        "statement": "magenta",
    }
)

# Highlighting off: SQL text and table names must print without injected ANSI codes.
_console = Console(stderr=True, theme=_THEME, highlight=False)

DRY_RUN_PREFIX = "[dry-run]"


@dataclass(slots=True)
class Logger:
    """Styled stderr messages; ``debug`` only prints when verbose."""

    verbose: bool = False

    def info(self, message: str) -> None:
        self._emit(message, "info")

    def success(self, message: str) -> None:
        self._emit(message, "success")

    def warning(self, message: str) -> None:
        self._emit(message, "warning")

    def error(self, message: str) -> None:
        self._emit(message, "error")

    def dry_run(self, message: str) -> None:
        """Announce a write that was skipped because the command is previewing."""
        self._emit(f"{DRY_RUN_PREFIX} {message}", "dry_run")

    def statement(self, sql: str) -> None:
        """Echo a SQL statement, e.g. the UPDATE a cell edit produced."""
        _console.print(sql, style="statement", markup=False, soft_wrap=True)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._emit(message, "debug")

    def _emit(self, message: str, style: str) -> None:
        _console.print(message, style=style, markup=False)


def get_logger(verbose: bool = False) -> Logger:
    """Return a configured Logger instance."""
    return Logger(verbose=verbose)
