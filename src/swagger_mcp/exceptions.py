"""Exception hierarchy for swagger-mcp.

All exceptions inherit from :class:`SwaggerMCPError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`swagger_mcp.exit_codes`.
Tool handlers raise these; the registration layer in
:mod:`swagger_mcp.tools.registry` turns them into MCP error results, and
:func:`swagger_mcp.app.main` exits with ``exc.exit_code`` when one escapes
during startup.

Subclass hierarchy::

    SwaggerMCPError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- ConfigError             (exit 3)
    +-- SpecFetchError          (exit 4)
    +-- SpecRefError            (exit 4)
    +-- UnsupportedSpecError    (exit 4)
    +-- NotFoundError           (exit 1)
    +-- NoServiceSelectedError  (exit 1)
    +-- StaleSelectionError     (exit 1)

A failed test request is *not* an exception: it is reported as an
:class:`~swagger_mcp.models.ExecutionResult` with ``status == 0``.
"""

from swagger_mcp.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_ERROR,
)


class SwaggerMCPError(Exception):
    """Base exception for all swagger-mcp errors.

    Args:
        message: Human-readable error description, shown to the MCP client.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SwaggerMCPError):
    """Raised for invalid command-line or tool arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(SwaggerMCPError):
    """Raised when ``swagger-targets.json`` is unreadable, invalid JSON, or has the wrong shape."""

    exit_code = EXIT_CONFIG_ERROR


class SpecFetchError(SwaggerMCPError):
    """Raised when a document cannot be fetched (network, HTTP status, missing file) or parsed."""

    exit_code = EXIT_SPEC_ERROR


class SpecRefError(SwaggerMCPError):
    """Raised when a ``$ref`` cannot be dereferenced (dangling pointer, unloadable target, cycle)."""

    exit_code = EXIT_SPEC_ERROR


class UnsupportedSpecError(SwaggerMCPError):
    """Raised when a document is neither OpenAPI 3.x nor Swagger 2.0."""

    exit_code = EXIT_SPEC_ERROR


class NotFoundError(SwaggerMCPError):
    """Raised when an endpoint, schema, or service alias does not exist."""


class NoServiceSelectedError(SwaggerMCPError):
    """Raised by operations that need a selected service when none is selected."""

    def __init__(self, message: str = "No service selected. Use swagger_select_service first."):
        super().__init__(message)


class StaleSelectionError(SwaggerMCPError):
    """Raised when a selection finished loading after a newer one was committed.

    The newer selection stays current; the stale one is discarded.
    """
