"""MCP tool surface.

:func:`register_tools` attaches one FastMCP tool per handler in
:mod:`swagger_mcp.tools.handlers`. Argument shapes are declared in the
signatures below, so FastMCP rejects bad input (an empty ``name``, an
unknown HTTP method, ...) before a handler runs. Handler failures are
re-raised as :class:`~mcp.server.fastmcp.exceptions.ToolError`, which the
server reports to the client as an error result carrying the message.
"""

from __future__ import annotations

import contextlib
import functools
from typing import Annotated, Any, Iterator, Literal, Optional

import anyio
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from swagger_mcp.exceptions import SwaggerMCPError
from swagger_mcp.output import debug
from swagger_mcp.tools import handlers
from swagger_mcp.tools.context import ServerContext

TOOL_NAMES = (
    "swagger_select_service",
    "swagger_list_services",
    "swagger_get_current",
    "swagger_clear_selection",
    "swagger_refresh",
    "swagger_list_endpoints",
    "swagger_get_endpoint",
    "swagger_search",
    "swagger_get_schema",
    "swagger_list_schemas",
    "swagger_test",
    "swagger_curl",
    "swagger_generate_code",
)

LowerMethod = Literal["get", "post", "put", "delete", "patch", "options", "head"]
UpperMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"]
CodegenMethod = Literal["get", "post", "put", "delete", "patch"]

NonEmpty = Annotated[str, Field(min_length=1)]
EndpointPath = Annotated[str, Field(min_length=1, description="Endpoint path, e.g. /users/{id}")]
StringMap = Optional[dict[str, Any]]


@contextlib.contextmanager
def _tool_errors(tool: str) -> Iterator[None]:
    """Turn :class:`SwaggerMCPError` into the MCP error result."""
    try:
        yield
    except SwaggerMCPError as exc:
        debug(f"{tool} failed: {exc}")
        raise ToolError(str(exc)) from exc


def register_tools(server: FastMCP, ctx: ServerContext) -> None:
    """Register every swagger tool on *server*, bound to *ctx*."""

    # --- Service selection ---

    @server.tool()
    async def swagger_select_service(
        name: Annotated[
            str,
            Field(min_length=1, description="Service alias from swagger-targets.json, a URL, or a file path"),
        ],
        base_url: Annotated[
            Optional[str], Field(description="Override the API base URL for test requests")
        ] = None,
    ) -> dict[str, Any]:
        """Select the API to work with. Loads and dereferences its Swagger/OpenAPI document."""
        with _tool_errors("swagger_select_service"):
            return await anyio.to_thread.run_sync(
                functools.partial(handlers.select_service, ctx, name, base_url)
            )

    @server.tool()
    def swagger_list_services(
        reload: Annotated[bool, Field(description="Re-read swagger-targets.json first")] = False,
    ) -> dict[str, Any]:
        """List the service aliases configured in swagger-targets.json."""
        with _tool_errors("swagger_list_services"):
            return handlers.list_services(ctx, reload=reload)

    @server.tool()
    def swagger_get_current() -> dict[str, Any]:
        """Show the currently selected service and its summary."""
        with _tool_errors("swagger_get_current"):
            return handlers.get_current(ctx)

    @server.tool()
    def swagger_clear_selection() -> dict[str, Any]:
        """Forget the currently selected service."""
        with _tool_errors("swagger_clear_selection"):
            return handlers.clear_selection(ctx)

    @server.tool()
    async def swagger_refresh() -> dict[str, Any]:
        """Reload the selected service's document, bypassing the cache."""
        with _tool_errors("swagger_refresh"):
            return await anyio.to_thread.run_sync(functools.partial(handlers.refresh, ctx))

    # --- Endpoints and schemas ---

    @server.tool()
    def swagger_list_endpoints(
        tag: Annotated[Optional[str], Field(description="Only endpoints with this tag")] = None,
    ) -> dict[str, Any]:
        """List every endpoint of the selected service."""
        with _tool_errors("swagger_list_endpoints"):
            return handlers.list_endpoints(ctx, tag=tag)

    @server.tool()
    def swagger_get_endpoint(method: LowerMethod, path: EndpointPath) -> dict[str, Any]:
        """Show parameters, request body, responses, and security of one endpoint."""
        with _tool_errors("swagger_get_endpoint"):
            return handlers.get_endpoint(ctx, method, path)

    @server.tool()
    def swagger_search(
        keyword: Annotated[
            str, Field(min_length=1, description="Matched against path, summary, description, operationId")
        ],
    ) -> dict[str, Any]:
        """Search endpoints by keyword (case-insensitive)."""
        with _tool_errors("swagger_search"):
            return handlers.search(ctx, keyword)

    @server.tool()
    def swagger_get_schema(schema_name: NonEmpty) -> dict[str, Any]:
        """Show one named schema (components/schemas or definitions)."""
        with _tool_errors("swagger_get_schema"):
            return handlers.get_schema(ctx, schema_name)

    @server.tool()
    def swagger_list_schemas() -> dict[str, Any]:
        """List the names of all schemas in the selected document."""
        with _tool_errors("swagger_list_schemas"):
            return handlers.list_schemas(ctx)

    # --- Requests ---

    @server.tool()
    async def swagger_test(
        method: UpperMethod,
        path: EndpointPath,
        path_params: Annotated[StringMap, Field(description="Values for {name} placeholders")] = None,
        query_params: Annotated[StringMap, Field(description="Query string parameters")] = None,
        body: Annotated[Any, Field(description="Request body; strings are sent verbatim")] = None,
        headers: Annotated[StringMap, Field(description="Extra request headers")] = None,
        base_url: Annotated[Optional[str], Field(description="Override the base URL")] = None,
        timeout_ms: Annotated[Optional[int], Field(gt=0, description="Request timeout")] = None,
    ) -> dict[str, Any]:
        """Send a real HTTP request to the selected API and return the response with a cURL equivalent."""
        with _tool_errors("swagger_test"):
            return await handlers.send_test_request(
                ctx,
                method,
                path,
                path_params=path_params,
                query_params=query_params,
                body=body,
                headers=headers,
                base_url=base_url,
                timeout_ms=timeout_ms,
            )

    @server.tool()
    def swagger_curl(
        method: UpperMethod,
        path: EndpointPath,
        path_params: Annotated[StringMap, Field(description="Values for {name} placeholders")] = None,
        query_params: Annotated[StringMap, Field(description="Query string parameters")] = None,
        body: Annotated[Any, Field(description="Request body; strings are used verbatim")] = None,
        headers: Annotated[StringMap, Field(description="Extra request headers")] = None,
        base_url: Annotated[Optional[str], Field(description="Override the base URL")] = None,
    ) -> dict[str, Any]:
        """Build the cURL command for a request without sending it."""
        with _tool_errors("swagger_curl"):
            return handlers.curl_command(
                ctx,
                method,
                path,
                path_params=path_params,
                query_params=query_params,
                body=body,
                headers=headers,
                base_url=base_url,
            )

    @server.tool()
    def swagger_generate_code(
        method: CodegenMethod,
        path: EndpointPath,
        language: Literal["typescript", "javascript"] = "typescript",
        http_client: Literal["axios", "fetch"] = "axios",
    ) -> dict[str, Any]:
        """Generate a TypeScript or JavaScript client function for one endpoint."""
        with _tool_errors("swagger_generate_code"):
            return handlers.generate_code(
                ctx, method, path, language=language, http_client=http_client
            )
