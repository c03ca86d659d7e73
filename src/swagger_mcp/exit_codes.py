"""Numeric process exit codes used when the server fails to start.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~swagger_mcp.exceptions.SwaggerMCPError` subclass.
Once the server is running, errors are reported to the MCP client instead
of terminating the process, so these codes only surface at startup.

Example::

    $ swagger-mcp --config broken.json
    $ echo $?
    3   # EXIT_CONFIG_ERROR -- swagger-targets.json could not be parsed
"""

EXIT_SUCCESS = 0
"""The server shut down cleanly."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_CONFIG_ERROR = 3
"""The service targets file could not be read or has the wrong shape."""

EXIT_SPEC_ERROR = 4
"""An API description could not be fetched, parsed, or dereferenced."""

EXIT_INTERRUPTED = 130
"""The process was interrupted with Ctrl-C."""
