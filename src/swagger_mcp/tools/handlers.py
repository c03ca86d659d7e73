"""Tool handlers -- one plain function per MCP tool.

Each handler takes the :class:`~swagger_mcp.tools.context.ServerContext`
plus already-validated arguments and returns a JSON-compatible dict. Errors
are raised as :class:`~swagger_mcp.exceptions.SwaggerMCPError` subclasses;
:mod:`swagger_mcp.tools.registry` turns them into MCP error results. Keeping
the handlers free of MCP types lets them be tested directly.

Base URL precedence for :func:`send_test_request` and :func:`curl_command`:

1. the ``base_url`` argument,
2. the selection's override (``baseUrl`` from ``swagger-targets.json`` or
   the ``base_url`` passed to :func:`select_service`),
3. :func:`~swagger_mcp.parser.dialect.extract_base_url` over the document's
   servers.
"""

from __future__ import annotations

from typing import Any, Optional

from swagger_mcp.client.executor import execute_request
from swagger_mcp.client.request import build_url, generate_curl
from swagger_mcp.codegen import generate_client_code
from swagger_mcp.exceptions import NotFoundError
from swagger_mcp.models import RequestSpec, ServiceSelection
from swagger_mcp.parser import extractor
from swagger_mcp.parser.dialect import extract_base_url, schemas_of
from swagger_mcp.tools.context import ServerContext

_SCHEMA_HINT_LIMIT = 10


def effective_base_url(selection: ServiceSelection, base_url: Optional[str] = None) -> str:
    """Apply the base URL precedence rule for *selection*."""
    if base_url:
        return base_url
    if selection.base_url_override:
        return selection.base_url_override
    return extract_base_url(selection.summary.servers, selection.source)


# ------------------------------------------------------------------ #
# Service selection
# ------------------------------------------------------------------ #


def select_service(ctx: ServerContext, name: str, base_url: Optional[str] = None) -> dict[str, Any]:
    """Resolve *name* (alias, URL, or path), load it, and make it current."""
    service = ctx.registry.resolve(name)
    override = base_url or service.base_url
    summary = ctx.session.select(
        service.source,
        base_url=override,
        alias=service.alias,
    )

    result: dict[str, Any] = {
        "message": (
            f'Connected to "{service.alias}" service' if service.is_alias else "Connected to direct URL"
        ),
        "source": service.source,
        "isAlias": service.is_alias,
        "baseUrl": override or extract_base_url(summary.servers, service.source),
        "api": {
            "title": summary.title,
            "version": summary.version,
            "description": summary.description,
            "specVersion": summary.spec_version,
            "endpointCount": summary.endpoint_count,
            "tags": summary.tags,
        },
    }
    if service.alias:
        result["aliasName"] = service.alias
    return result


def list_services(ctx: ServerContext, reload: bool = False) -> dict[str, Any]:
    """List configured aliases, optionally re-reading the targets file first."""
    targets = ctx.registry.reload() if reload else ctx.registry.targets()
    selection = ctx.session.current()
    path = ctx.registry.path

    result: dict[str, Any] = {
        "configPath": str(path) if path else None,
        "currentSource": selection.source if selection else None,
        "total": len(targets),
        "services": [target.to_wire() for target in targets.values()],
    }
    if not targets:
        result["message"] = "No services configured. Create swagger-targets.json in the project root."
    return result


def get_current(ctx: ServerContext) -> dict[str, Any]:
    """Describe the current selection."""
    selection = ctx.session.require()
    return {
        "source": selection.source,
        "aliasName": selection.alias,
        "baseUrl": effective_base_url(selection),
        **selection.summary.to_wire(),
    }


def clear_selection(ctx: ServerContext) -> dict[str, Any]:
    """Forget the current selection."""
    previous = ctx.session.current()
    ctx.session.clear()
    return {
        "message": "Selection cleared" if previous else "No service was selected",
        "previousSource": previous.source if previous else None,
    }


def refresh(ctx: ServerContext) -> dict[str, Any]:
    """Drop the cached document of the current selection and load it again."""
    summary = ctx.session.refresh()
    selection = ctx.session.require()
    return {
        "message": "Specification reloaded",
        "source": selection.source,
        **summary.to_wire(),
    }


# ------------------------------------------------------------------ #
# Endpoints and schemas
# ------------------------------------------------------------------ #


def list_endpoints(ctx: ServerContext, tag: Optional[str] = None) -> dict[str, Any]:
    endpoints = extractor.list_endpoints(ctx.session.document(), tag=tag)
    return {
        "total": len(endpoints),
        "tag": tag,
        "endpoints": [endpoint.to_wire() for endpoint in endpoints],
    }


def get_endpoint(ctx: ServerContext, method: str, path: str) -> dict[str, Any]:
    return extractor.get_endpoint_detail(ctx.session.document(), method, path).to_wire()


def search(ctx: ServerContext, keyword: str) -> dict[str, Any]:
    endpoints = extractor.search_endpoints(ctx.session.document(), keyword)
    return {
        "keyword": keyword,
        "total": len(endpoints),
        "endpoints": [endpoint.to_wire() for endpoint in endpoints],
    }


def get_schema(ctx: ServerContext, schema_name: str) -> dict[str, Any]:
    """Return one named schema (dereferenced).

    Raises:
        NotFoundError: If the document has no schemas or none by that name.
            The message lists up to ten available names.
    """
    schemas = schemas_of(ctx.session.document())
    if not schemas:
        raise NotFoundError("No schemas found in specification")
    if schema_name not in schemas:
        names = list(schemas)
        available = ", ".join(names[:_SCHEMA_HINT_LIMIT])
        if len(names) > _SCHEMA_HINT_LIMIT:
            available += ", ..."
        raise NotFoundError(f'Schema "{schema_name}" not found. Available: {available}')
    return {"name": schema_name, "schema": schemas[schema_name]}


def list_schemas(ctx: ServerContext) -> dict[str, Any]:
    names = list(schemas_of(ctx.session.document()))
    result: dict[str, Any] = {"total": len(names), "schemas": names}
    if not names:
        result["message"] = "No schemas found in specification"
    return result


# ------------------------------------------------------------------ #
# Requests
# ------------------------------------------------------------------ #


def build_request(
    ctx: ServerContext,
    method: str,
    path: str,
    path_params: Optional[dict[str, Any]] = None,
    query_params: Optional[dict[str, Any]] = None,
    body: Any = None,
    headers: Optional[dict[str, Any]] = None,
    base_url: Optional[str] = None,
    timeout_ms: Optional[int] = None,
) -> RequestSpec:
    """Assemble a :class:`~swagger_mcp.models.RequestSpec` against the current selection."""
    selection = ctx.session.require()
    return RequestSpec(
        base_url=effective_base_url(selection, base_url),
        method=method,
        path=path,
        path_params=path_params,
        query_params=query_params,
        headers=headers,
        body=body,
        timeout_ms=timeout_ms or ctx.settings.timeout_ms,
    )


async def send_test_request(
    ctx: ServerContext,
    method: str,
    path: str,
    path_params: Optional[dict[str, Any]] = None,
    query_params: Optional[dict[str, Any]] = None,
    body: Any = None,
    headers: Optional[dict[str, Any]] = None,
    base_url: Optional[str] = None,
    timeout_ms: Optional[int] = None,
) -> dict[str, Any]:
    """Send a test request. Transport failures come back as ``status: 0``, never raise."""
    request = build_request(
        ctx, method, path, path_params, query_params, body, headers, base_url, timeout_ms
    )
    result = await execute_request(request, transport=ctx.transport)
    return {
        "request": {
            "method": request.method,
            "path": path,
            "baseUrl": request.base_url,
            "url": build_url(request),
        },
        "response": {
            "status": result.status,
            "statusText": result.status_text,
            "headers": result.headers,
            "body": result.body,
            "duration": f"{result.duration_ms}ms",
        },
        "curl": result.curl,
    }


def curl_command(
    ctx: ServerContext,
    method: str,
    path: str,
    path_params: Optional[dict[str, Any]] = None,
    query_params: Optional[dict[str, Any]] = None,
    body: Any = None,
    headers: Optional[dict[str, Any]] = None,
    base_url: Optional[str] = None,
) -> dict[str, Any]:
    request = build_request(ctx, method, path, path_params, query_params, body, headers, base_url)
    return {"curl": generate_curl(request), "url": build_url(request)}


def generate_code(
    ctx: ServerContext,
    method: str,
    path: str,
    language: str = "typescript",
    http_client: str = "axios",
) -> dict[str, Any]:
    selection = ctx.session.require()
    detail = extractor.get_endpoint_detail(ctx.session.document(), method, path)
    generated = generate_client_code(
        detail,
        language=language,
        http_client=http_client,
        base_url_hint=effective_base_url(selection),
    )
    return generated.to_wire()
