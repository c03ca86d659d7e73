"""Read-only ``swagger://`` resources.

Resources mirror the most common tools for clients that prefer reading to
calling. They always return a JSON document; failures are reported inside
it as ``{"error": ..., "hint": ...}`` instead of being raised.
"""

from __future__ import annotations

import json
from typing import Any

from mcp.server.fastmcp import FastMCP

from swagger_mcp.exceptions import SwaggerMCPError
from swagger_mcp.parser.dialect import schemas_of
from swagger_mcp.parser.extractor import list_endpoints
from swagger_mcp.tools.context import ServerContext
from swagger_mcp.tools.handlers import get_current, list_services

NOT_CONNECTED = {
    "error": "No service connected",
    "hint": "Use swagger_select_service to connect to a service first",
}


def _dump(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _failure(exc: SwaggerMCPError) -> str:
    return _dump({"error": str(exc)})


def read_services(ctx: ServerContext) -> str:
    try:
        return _dump(list_services(ctx))
    except SwaggerMCPError as exc:
        return _failure(exc)


def read_current_info(ctx: ServerContext) -> str:
    if ctx.session.current() is None:
        return _dump(NOT_CONNECTED)
    try:
        return _dump(get_current(ctx))
    except SwaggerMCPError as exc:
        return _failure(exc)


def read_current_endpoints(ctx: ServerContext) -> str:
    """Every endpoint as ``{method, path, summary, tags, operationId}``."""
    if ctx.session.current() is None:
        return _dump(NOT_CONNECTED)
    try:
        endpoints = list_endpoints(ctx.session.document())
    except SwaggerMCPError as exc:
        return _failure(exc)
    return _dump(
        {
            "total": len(endpoints),
            "endpoints": [
                {
                    "method": endpoint.method.value.upper(),
                    "path": endpoint.path,
                    "summary": endpoint.summary,
                    "tags": endpoint.tags,
                    "operationId": endpoint.operation_id,
                }
                for endpoint in endpoints
            ],
        }
    )


def read_current_schemas(ctx: ServerContext) -> str:
    """Every named schema as ``{name, type, description, properties}``.

    ``properties`` holds property names only; ``type`` defaults to
    ``object``.
    """
    if ctx.session.current() is None:
        return _dump(NOT_CONNECTED)
    try:
        schemas = schemas_of(ctx.session.document())
    except SwaggerMCPError as exc:
        return _failure(exc)

    entries = []
    for name, schema in schemas.items():
        schema = schema if isinstance(schema, dict) else {}
        properties = schema.get("properties")
        entries.append(
            {
                "name": name,
                "type": schema.get("type", "object"),
                "description": schema.get("description"),
                "properties": list(properties) if isinstance(properties, dict) else [],
            }
        )
    return _dump({"total": len(entries), "schemas": entries})


def register_resources(server: FastMCP, ctx: ServerContext) -> None:
    """Register the ``swagger://`` resources on *server*, bound to *ctx*."""

    @server.resource(
        "swagger://services",
        name="services",
        description="Service aliases configured in swagger-targets.json",
        mime_type="application/json",
    )
    def services() -> str:
        return read_services(ctx)

    @server.resource(
        "swagger://current/info",
        name="current-info",
        description="Summary of the currently selected API",
        mime_type="application/json",
    )
    def current_info() -> str:
        return read_current_info(ctx)

    @server.resource(
        "swagger://current/endpoints",
        name="current-endpoints",
        description="Endpoints of the currently selected API",
        mime_type="application/json",
    )
    def current_endpoints() -> str:
        return read_current_endpoints(ctx)

    @server.resource(
        "swagger://current/schemas",
        name="current-schemas",
        description="Named schemas of the currently selected API",
        mime_type="application/json",
    )
    def current_schemas() -> str:
        return read_current_schemas(ctx)
