"""The MCP server surface: tools, resources, and the server factory.

* :mod:`~swagger_mcp.tools.context` -- :class:`ServerContext`, the shared
  state handed to every handler.
* :mod:`~swagger_mcp.tools.handlers` -- plain functions implementing each
  tool; no MCP types.
* :mod:`~swagger_mcp.tools.registry` -- FastMCP tool registration and
  error conversion.
* :mod:`~swagger_mcp.tools.resources` -- ``swagger://`` resources.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from swagger_mcp.tools.context import ServerContext
from swagger_mcp.tools.registry import TOOL_NAMES, register_tools
from swagger_mcp.tools.resources import register_resources

SERVER_NAME = "swagger-mcp"

INSTRUCTIONS = (
    "Explore and exercise REST APIs described by Swagger 2.0 or OpenAPI 3.x documents. "
    "Start with swagger_list_services or swagger_select_service, then browse endpoints "
    "and schemas, send test requests with swagger_test, and generate client code."
)


def create_server(ctx: ServerContext) -> FastMCP:
    """Build a FastMCP server with every tool and resource bound to *ctx*."""
    server = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)
    register_tools(server, ctx)
    register_resources(server, ctx)
    return server


__all__ = ["SERVER_NAME", "TOOL_NAMES", "ServerContext", "create_server"]
