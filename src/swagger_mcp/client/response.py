"""Map an :class:`httpx.Response` onto the fields of an :class:`~swagger_mcp.models.ExecutionResult`.

The body is decoded as JSON only when the response declares a JSON content
type (``application/json``, ``application/problem+json``, ...). A body that
claims to be JSON but does not parse is returned as text rather than
raising, so a misbehaving API never turns a test request into an error.
"""

from __future__ import annotations

import json
from typing import Any

import httpx


def is_json_content_type(content_type: str) -> bool:
    """Return ``True`` for ``application/json`` and ``+json`` media types."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Args:
        response: The :class:`httpx.Response` to extract data from.

    Returns:
        A JSON-decoded object when the content type is JSON and the body
        parses, otherwise the raw text (an empty string for an empty body).
    """
    if not response.content:
        return ""

    if is_json_content_type(response.headers.get("content-type", "")):
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            pass

    return response.text


def response_headers(response: httpx.Response) -> dict[str, str]:
    """Flatten response headers into a plain dict (repeated headers are comma-joined)."""
    headers: dict[str, str] = {}
    for key, value in response.headers.multi_items():
        headers[key] = f"{headers[key]}, {value}" if key in headers else value
    return headers
