"""Typer entry point for swagger-mcp.

The ``swagger-mcp`` console script runs :func:`main`, which installs signal
handlers and invokes the single :func:`serve` command. ``serve`` sets up
diagnostics, loads settings and the service registry, prints a short
startup banner to stderr, and runs the FastMCP server over stdio until the
client disconnects.

stdout is reserved for the MCP protocol; nothing here writes to it except
``--version`` (which exits before the server starts). Unhandled exceptions
are written to a crash log under ``~/.swagger-mcp/logs``.

See Also:
    :mod:`swagger_mcp.config`: Targets file discovery and settings.
    :mod:`swagger_mcp.tools`: The tools and resources the server exposes.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

import typer

from swagger_mcp import __version__
from swagger_mcp.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED

if TYPE_CHECKING:
    from swagger_mcp.tools.context import ServerContext


app = typer.Typer(
    name="swagger-mcp",
    help="MCP server for exploring and testing Swagger 2.0 / OpenAPI 3.x APIs.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"swagger-mcp {__version__}")
        raise typer.Exit()


@app.command()
def serve(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to swagger-targets.json (or the directory containing it).",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Run the MCP server over stdio.

    Args:
        config: Explicit targets file or directory (highest precedence).
        no_color: Disable all colour and Rich markup.
        quiet: Suppress the startup banner and informational messages.
        verbose: Enable debug-level diagnostic output.
        version: If ``True``, print the version string and exit.

    Raises:
        ConfigError: If the targets file or an environment setting is
            invalid. Raised before the server starts.
    """
    from swagger_mcp.config import ServiceRegistry, load_settings
    from swagger_mcp.output import OutputManager, set_output
    from swagger_mcp.tools import ServerContext, create_server

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))

    settings = load_settings()
    registry = ServiceRegistry(config)
    registry.targets()

    ctx = ServerContext.create(registry, settings=settings)
    server = create_server(ctx)
    _print_banner(ctx)
    server.run()


def _print_banner(ctx: ServerContext) -> None:
    """Print configured services and available tools to stderr."""
    from swagger_mcp.output import get_output, info
    from swagger_mcp.tools import TOOL_NAMES

    output = get_output()
    info(f"swagger-mcp {__version__} (stdio)")
    services = ctx.registry.list_services()
    if services:
        output.print_table(
            ["Service", "Spec", "Base URL"],
            [[s.name, s.spec, s.base_url or "-"] for s in services],
            title="Configured services",
        )
    else:
        info("No services configured; select one by URL or file path.")
    info(f"Tools: {', '.join(TOOL_NAMES)}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from swagger_mcp.config import get_logs_dir

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = get_logs_dir() / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """Console-script entry point.

    :class:`~swagger_mcp.exceptions.SwaggerMCPError` instances cause a clean
    exit with the error's ``exit_code``. All other exceptions produce a
    crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from swagger_mcp.exceptions import SwaggerMCPError
        from swagger_mcp.output import error

        if isinstance(exc, SwaggerMCPError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
