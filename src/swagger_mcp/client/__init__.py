"""HTTP test client -- URL building, cURL rendering, and async execution.

* :mod:`~swagger_mcp.client.request` -- path substitution, query strings,
  and :func:`generate_curl`.
* :mod:`~swagger_mcp.client.executor` -- :class:`ApiClient`, a thin wrapper
  over :class:`httpx.AsyncClient` that reports failures as data.
* :mod:`~swagger_mcp.client.response` -- response body decoding.
"""

from swagger_mcp.client.executor import ApiClient, execute_request
from swagger_mcp.client.request import (
    build_query_string,
    build_url,
    generate_curl,
    substitute_path,
)

__all__ = [
    "ApiClient",
    "build_query_string",
    "build_url",
    "execute_request",
    "generate_curl",
    "substitute_path",
]
