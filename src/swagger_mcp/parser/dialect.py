"""Tell Swagger 2.0 and OpenAPI 3.x documents apart and read their common metadata.

Every function that reads a version-specific field goes through
:func:`classify` first. The two dialects differ mainly in *where* things
live:

=================  ==========================  ==========================
concept            OpenAPI 3.x                 Swagger 2.0
=================  ==========================  ==========================
version marker     ``openapi``                 ``swagger``
servers            ``servers[].url``           ``schemes`` + ``host`` +
                                               ``basePath``
schemas            ``components.schemas``      ``definitions``
=================  ==========================  ==========================
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urljoin, urlsplit

from swagger_mcp.exceptions import UnsupportedSpecError
from swagger_mcp.models import SpecDialect, SpecSummary
from swagger_mcp.parser.loader import is_url

LOCALHOST = "http://localhost"
"""Base URL used when neither the document nor its source yields a host."""

_SERVER_VARIABLE = re.compile(r"\{([^{}]+)\}")


def classify(doc: Any) -> SpecDialect:
    """Return the dialect of *doc*.

    The ``openapi`` key wins over ``swagger`` when both are present. Any
    non-dict input, or a dict with neither key, is ``UNKNOWN``.
    """
    if not isinstance(doc, dict):
        return SpecDialect.UNKNOWN
    if "openapi" in doc:
        return SpecDialect.OPENAPI_V3
    if "swagger" in doc:
        return SpecDialect.SWAGGER_V2
    return SpecDialect.UNKNOWN


def require_dialect(doc: Any) -> SpecDialect:
    """Classify *doc*, rejecting documents that are neither dialect.

    Raises:
        UnsupportedSpecError: If *doc* is ``UNKNOWN``.
    """
    dialect = classify(doc)
    if dialect is SpecDialect.UNKNOWN:
        raise UnsupportedSpecError(
            "Unsupported document: expected an 'openapi' (3.x) or 'swagger' (2.0) field"
        )
    return dialect


def server_urls(doc: dict[str, Any]) -> list[str]:
    """Return the server URLs declared by *doc*, in order.

    OpenAPI 3.x ``servers`` entries have their ``{variable}`` placeholders
    replaced by each variable's ``default``. Swagger 2.0 yields exactly one
    URL built from the first scheme (default ``http``), ``host`` (default
    ``localhost``), and ``basePath`` (default empty).
    """
    dialect = require_dialect(doc)
    if dialect is SpecDialect.SWAGGER_V2:
        schemes = doc.get("schemes") or ["http"]
        host = doc.get("host") or "localhost"
        base_path = doc.get("basePath") or ""
        return [f"{schemes[0]}://{host}{base_path}"]

    urls: list[str] = []
    for server in doc.get("servers") or []:
        if not isinstance(server, dict) or not isinstance(server.get("url"), str):
            continue
        urls.append(_expand_variables(server["url"], server.get("variables") or {}))
    return urls


def _expand_variables(url: str, variables: dict[str, Any]) -> str:
    def _default(match: re.Match[str]) -> str:
        variable = variables.get(match.group(1))
        if isinstance(variable, dict) and "default" in variable:
            return str(variable["default"])
        return match.group(0)

    return _SERVER_VARIABLE.sub(_default, url)


def schemas_of(doc: dict[str, Any]) -> dict[str, Any]:
    """Return the named schema map (``components.schemas`` or ``definitions``).

    Always a dict; empty when the document declares no schemas.
    """
    dialect = require_dialect(doc)
    if dialect is SpecDialect.OPENAPI_V3:
        schemas = (doc.get("components") or {}).get("schemas")
    else:
        schemas = doc.get("definitions")
    return schemas if isinstance(schemas, dict) else {}


def summarize(doc: dict[str, Any]) -> SpecSummary:
    """Build a :class:`~swagger_mcp.models.SpecSummary` of *doc*.

    Raises:
        UnsupportedSpecError: If *doc* is neither dialect.
    """
    from swagger_mcp.parser.extractor import list_endpoints

    dialect = require_dialect(doc)
    info = doc.get("info") or {}
    if dialect is SpecDialect.OPENAPI_V3:
        label = f"OpenAPI {doc['openapi']}"
    else:
        label = f"Swagger {doc['swagger']}"

    tags = [
        tag["name"]
        for tag in doc.get("tags") or []
        if isinstance(tag, dict) and isinstance(tag.get("name"), str)
    ]

    return SpecSummary(
        title=str(info.get("title", "Untitled API")),
        version=str(info.get("version", "")),
        description=info.get("description"),
        spec_version=label,
        servers=server_urls(doc),
        endpoint_count=len(list_endpoints(doc)),
        tags=tags or None,
    )


def extract_base_url(servers: list[str], source: str) -> str:
    """Derive the base URL requests should be sent to.

    * The first server wins. A relative server (``/v1``) is joined to the
      scheme and host of *source* when *source* is an http(s) URL, and to
      ``http://localhost`` otherwise.
    * With no servers, the scheme and host of an http(s) *source* is used,
      else ``http://localhost``.

    Args:
        servers: Server URLs as returned by :func:`server_urls`.
        source: The URL or file path the document was loaded from.
    """
    origin = _origin(source) if is_url(source) else LOCALHOST
    if not servers:
        return origin

    server = servers[0]
    if is_url(server):
        return server
    if server.startswith("/") and not server.startswith("//"):
        return origin + server
    # "v1", "./v1", "//host/v1" are relative to the document location
    return urljoin(source if is_url(source) else origin + "/", server)


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"
