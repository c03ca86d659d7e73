"""In-memory caching of resolved API description documents.

This package provides :class:`DocumentCache`, keyed by the exact source
string (URL or file path) a document was loaded from. It is consumed by
:class:`~swagger_mcp.parser.document.DocumentResolver`.
"""

from swagger_mcp.cache.cache import DocumentCache

__all__ = ["DocumentCache"]
