"""Diagnostic output bound strictly to stderr.

When the server runs over stdio, **stdout belongs to the MCP protocol**: a
single stray byte there corrupts the JSON-RPC stream. Every human-facing
message (startup banner, warnings, debug traces of tool calls) is written
to stderr through this module. Conventions follow `clig.dev
<https://clig.dev/>`_:

* ``NO_COLOR`` (any value), ``TERM=dumb`` and ``--no-color`` switch to plain
  text with ``Warning:`` / ``Error:`` / ``[debug]`` prefixes.
* ``--quiet`` hides the banner and informational lines; warnings and errors
  are always shown.
* ``--verbose`` enables debug lines (cache hits, selection commits, tool
  failures).

:class:`OutputManager` holds the console and flags. It is installed once by
:func:`~swagger_mcp.app.serve` via :func:`set_output`; the module-level
helpers (:func:`info`, :func:`debug`, ...) forward to it so the rest of the
package never passes a manager around.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table


class OutputManager:
    """Writes diagnostics to stderr, plain or with Rich markup.

    Args:
        no_color: Force plain output even on a colour-capable terminal.
        quiet: Hide informational output (banner, info, success).
        verbose: Show debug output.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._plain = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._console = Console(file=sys.stderr, no_color=self._plain, stderr=True)

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    def _write(self, plain: str, markup: str) -> None:
        if self._plain:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._console.print(markup)

    # ------------------------------------------------------------------ #
    # Message levels
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        """Informational line; hidden by ``--quiet``."""
        if not self._quiet:
            self._write(message, message)

    def success(self, message: str) -> None:
        """Green confirmation line; hidden by ``--quiet``."""
        if not self._quiet:
            self._write(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Warning line, shown even with ``--quiet``."""
        self._write(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Error line, always shown."""
        self._write(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Debug trace, shown only with ``--verbose``.

        The ``[debug]`` prefix is escaped in Rich mode so it is printed
        literally instead of being parsed as a style tag.
        """
        if self._verbose:
            self._write(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print the startup banner table; hidden by ``--quiet``.

        Plain mode writes one tab-separated line per row, headers first.

        Args:
            headers: Column headers.
            rows: Cell strings, one list per row.
            title: Table caption (Rich mode only).
        """
        if self._quiet:
            return
        if self._plain:
            for line in [headers, *rows]:
                print("\t".join(line), file=sys.stderr, flush=True)
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._console.print(table)


def _should_disable_color() -> bool:
    """``True`` when ``NO_COLOR`` is set (to anything) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one if needed."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests use this between cases)."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def debug(message: str) -> None:
    get_output().debug(message)
