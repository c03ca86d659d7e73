"""Load API description documents from a URL or a local file.

This module handles all I/O for fetching raw Swagger / OpenAPI documents
and converting them into Python dictionaries. Both JSON and YAML are
supported with automatic format detection: the ``Content-Type`` header
(for URLs) or the file extension (for paths) is used as a hint, and
content-based detection is the fallback.

The loader does not judge which dialect a document is written in; that is
:mod:`swagger_mcp.parser.dialect`'s job. It is also used by
:mod:`swagger_mcp.parser.resolver` to fetch external ``$ref`` targets.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import yaml

from swagger_mcp.exceptions import SpecFetchError
from swagger_mcp.output import debug

FETCH_TIMEOUT = 30.0
"""Seconds allowed for fetching a remote document."""


def is_url(source: str) -> bool:
    """Return ``True`` when *source* is an ``http://`` or ``https://`` URL."""
    return source.startswith(("http://", "https://"))


def load_spec(source: str) -> dict[str, Any]:
    """Load a document from URL or file path.

    Args:
        source: A URL (http/https) or a file path.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecFetchError: If the source cannot be fetched, read, or parsed,
            or does not contain a JSON/YAML object.
    """
    if is_url(source):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document from URL. Supports JSON and YAML responses.

    Raises:
        SpecFetchError: On network failure, non-2xx status, or unparseable
            content.
    """
    debug(f"Fetching {url}")
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecFetchError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.HTTPError as exc:
        raise SpecFetchError(f"Failed to fetch spec from {url}: {exc}") from exc
    except httpx.InvalidURL as exc:
        raise SpecFetchError(f"Invalid spec URL {url}: {exc}") from exc

    content = response.text
    if not content.strip():
        raise SpecFetchError(f"Empty response fetching spec from {url}")

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    elif url.split("?", 1)[0].lower().endswith((".yaml", ".yml")):
        hint = "yaml"

    return _parse_content(content, hint=hint, source=url)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Raises:
        SpecFetchError: If the file is missing, unreadable, empty, or
            cannot be parsed.
    """
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise SpecFetchError(f"Spec file not found: {path}")

    debug(f"Reading {file_path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecFetchError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecFetchError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint, source=path)


def _parse_content(content: str, hint: str = "", source: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').
        source: Where the content came from, used in error messages.

    Returns:
        The parsed dictionary.

    Raises:
        SpecFetchError: If the content cannot be parsed as either format,
            or parses to something other than an object.
    """
    where = f" ({source})" if source else ""
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecFetchError(f"Invalid JSON{where}: {exc}") from exc
        else:
            return _require_object(result, where)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = f"Failed to parse spec as JSON or YAML{where}"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise SpecFetchError(msg) from exc

    return _require_object(result, where)


def _require_object(result: Any, where: str) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecFetchError(f"Spec must be a JSON/YAML object{where} (got {kind})")
    return result
