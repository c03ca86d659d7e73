"""Fetch, dereference, and cache API description documents.

:class:`DocumentResolver` is the single entry point the rest of the server
uses to turn a source string (URL or file path) into a fully dereferenced
document. It combines :func:`~swagger_mcp.parser.loader.load_spec`,
:func:`~swagger_mcp.parser.resolver.resolve_refs`, and a
:class:`~swagger_mcp.cache.DocumentCache`.

Resolved documents are shared between callers and must be treated as
read-only.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from swagger_mcp.cache import DocumentCache
from swagger_mcp.output import debug
from swagger_mcp.parser.loader import load_spec
from swagger_mcp.parser.resolver import resolve_refs


class DocumentResolver:
    """Resolve source strings into dereferenced documents, with caching.

    Args:
        cache: Cache to consult and populate. A private one is created when
            omitted.
        loader: Callable that fetches and parses one document. Also used for
            external ``$ref`` targets.
        allow_circular: Passed to
            :func:`~swagger_mcp.parser.resolver.resolve_refs`.

    Example::

        resolver = DocumentResolver()
        doc = resolver.resolve("https://petstore.swagger.io/v2/swagger.json")
        assert resolver.resolve("https://petstore.swagger.io/v2/swagger.json") is doc
    """

    def __init__(
        self,
        cache: Optional[DocumentCache] = None,
        loader: Callable[[str], dict[str, Any]] = load_spec,
        allow_circular: bool = True,
    ) -> None:
        self._cache = cache if cache is not None else DocumentCache()
        self._loader = loader
        self._allow_circular = allow_circular

    @property
    def cache(self) -> DocumentCache:
        """The underlying document cache."""
        return self._cache

    def resolve(self, source: str, use_cache: bool = True) -> dict[str, Any]:
        """Return the dereferenced document for *source*.

        With ``use_cache=True`` a cached document is returned as the
        identical object and nothing is fetched. Otherwise (or on a miss) the
        document is loaded, dereferenced, and stored under *source*
        verbatim, replacing any previous entry.

        Raises:
            SpecFetchError: If the document cannot be fetched or parsed.
            SpecRefError: If a ``$ref`` cannot be dereferenced.
        """
        if use_cache:
            cached = self._cache.get(source)
            if cached is not None:
                debug(f"Document cache hit: {source}")
                return cached
            debug(f"Document cache miss: {source}")

        raw = self._loader(source)
        document = resolve_refs(
            raw,
            base=source,
            allow_circular=self._allow_circular,
            loader=self._loader,
        )
        self._cache.set(source, document)
        return document

    def invalidate(self, source: Optional[str] = None) -> None:
        """Drop the cached entry for *source*, or every entry when ``None``."""
        self._cache.invalidate(source)
