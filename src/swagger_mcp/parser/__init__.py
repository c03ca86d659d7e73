"""Description parser -- load, dereference, classify, and extract endpoints.

This sub-package turns a Swagger 2.0 or OpenAPI 3.x document (JSON or YAML,
local file or remote URL) into dialect-independent endpoint models.

Typical usage::

    from swagger_mcp.parser import DocumentResolver, list_endpoints, summarize

    resolver = DocumentResolver()
    doc = resolver.resolve("https://petstore.swagger.io/v2/swagger.json")
    print(summarize(doc).title)
    for endpoint in list_endpoints(doc, tag="pet"):
        print(endpoint.method.value.upper(), endpoint.path)

Sub-modules:

* :mod:`~swagger_mcp.parser.loader` -- I/O layer (URL, file) plus format
  detection.
* :mod:`~swagger_mcp.parser.resolver` -- Recursive ``$ref`` resolution,
  internal and external, with circular-reference detection.
* :mod:`~swagger_mcp.parser.document` -- Cached fetch-and-resolve entry
  point.
* :mod:`~swagger_mcp.parser.dialect` -- Dialect classification, summary,
  servers, schemas, and base-URL derivation.
* :mod:`~swagger_mcp.parser.extractor` -- Endpoint listing, search, and
  detail extraction.
"""

from swagger_mcp.parser.dialect import (
    classify,
    extract_base_url,
    require_dialect,
    schemas_of,
    server_urls,
    summarize,
)
from swagger_mcp.parser.document import DocumentResolver
from swagger_mcp.parser.extractor import get_endpoint_detail, list_endpoints, search_endpoints
from swagger_mcp.parser.loader import load_spec
from swagger_mcp.parser.resolver import resolve_refs

__all__ = [
    "DocumentResolver",
    "classify",
    "extract_base_url",
    "get_endpoint_detail",
    "list_endpoints",
    "load_spec",
    "require_dialect",
    "resolve_refs",
    "schemas_of",
    "search_endpoints",
    "server_urls",
    "summarize",
]
