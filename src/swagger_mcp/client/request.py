"""Build request URLs and equivalent cURL commands from a :class:`~swagger_mcp.models.RequestSpec`.

The URL built here is shared by :func:`generate_curl` and by
:class:`~swagger_mcp.client.executor.ApiClient`, so the command shown to the
user always targets exactly what the test client sends.

Values are percent-encoded the way ``encodeURIComponent`` does it: letters,
digits and ``-_.!~*'()`` are kept, everything else (including ``/``, ``?``,
``&``, ``=`` and space) is escaped.
"""

from __future__ import annotations

import json
import re
import shlex
from typing import Any, Mapping
from urllib.parse import quote

from swagger_mcp.models import RequestSpec

URI_COMPONENT_SAFE = "-_.!~*'()"

_BRACE_PLACEHOLDER = re.compile(r"\{([^{}/]+)\}")
_COLON_PLACEHOLDER = re.compile(r"(?<=/):([A-Za-z_][A-Za-z0-9_]*)(?=/|$)")

CURL_SEPARATOR = " \\\n  "
"""Joins the parts of a rendered cURL command (backslash, newline, two spaces)."""


def encode_component(value: str) -> str:
    """Percent-encode *value* with ``encodeURIComponent`` semantics."""
    return quote(value, safe=URI_COMPONENT_SAFE)


def substitute_path(path: str, params: Mapping[str, str]) -> str:
    """Replace ``{name}`` and ``:name`` placeholders in *path*.

    Every occurrence of a placeholder is replaced. ``:name`` only counts
    when it spans a whole path segment (``/users/:id``), so a literal colon
    inside a segment (``/v1/items:batchGet``) is left alone. Placeholders
    with no matching entry in *params* stay verbatim.

    Example::

        >>> substitute_path("/users/{id}/files/:name", {"id": "a b", "name": "x/y"})
        '/users/a%20b/files/x%2Fy'
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in params:
            return encode_component(str(params[name]))
        return match.group(0)

    path = _BRACE_PLACEHOLDER.sub(_replace, path)
    return _COLON_PLACEHOLDER.sub(_replace, path)


def build_query_string(params: Mapping[str, str]) -> str:
    """Encode *params* as ``k=v`` pairs joined with ``&`` (empty string when none)."""
    return "&".join(
        f"{encode_component(str(key))}={encode_component(str(value))}"
        for key, value in params.items()
    )


def build_url(request: RequestSpec) -> str:
    """Return the full request URL.

    The base URL loses any trailing ``/`` before the substituted path is
    appended; ``?query`` is added only when there are query parameters.
    """
    url = request.base_url.rstrip("/") + substitute_path(request.path, request.path_params)
    query = build_query_string(request.query_params)
    if query:
        url = f"{url}?{query}"
    return url


def has_header(headers: Mapping[str, str], name: str) -> bool:
    """Case-insensitive header presence check."""
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


def render_body(body: Any) -> str:
    """Render a request body: strings verbatim, anything else as indented JSON."""
    if isinstance(body, str):
        return body
    return json.dumps(body, indent=2, ensure_ascii=False)


def generate_curl(request: RequestSpec) -> str:
    """Render *request* as a copy-pasteable cURL command.

    The output is deterministic: header order follows insertion order,
    ``-X`` is omitted for GET, and ``Content-Type: application/json`` is
    added when a body is present and no content-type header (in any case)
    was supplied. Every argument is shell-quoted.

    Example::

        curl \\
          -X POST \\
          -H 'Content-Type: application/json' \\
          -d '{
          "name": "Rex"
        }' \\
          https://api.example.com/pets
    """
    parts = ["curl"]
    if request.method != "GET":
        parts.append(f"-X {request.method}")

    for key, value in request.headers.items():
        parts.append(f"-H {shlex.quote(f'{key}: {value}')}")

    if request.body is not None:
        if not has_header(request.headers, "content-type"):
            parts.append(f"-H {shlex.quote('Content-Type: application/json')}")
        parts.append(f"-d {shlex.quote(render_body(request.body))}")

    parts.append(shlex.quote(build_url(request)))
    return CURL_SEPARATOR.join(parts)
