"""Process-lifetime cache of fully dereferenced documents.

Entries are keyed by the source string verbatim -- ``./petstore.yaml`` and
``petstore.yaml`` are different keys -- and never expire. A cache hit must
hand back the *same* object that was stored, so the cache lives in memory
rather than on disk; resolved documents are treated as immutable by every
consumer, which makes sharing them safe.

Writers are serialised with a lock so that concurrent tool calls cannot
interleave an ``invalidate`` with a ``set`` for the same key.
"""

from __future__ import annotations

import threading
from typing import Any, Optional


class DocumentCache:
    """Mapping of source key to resolved document.

    Example::

        cache = DocumentCache()
        cache.set("https://petstore3.swagger.io/api/v3/openapi.json", doc)
        assert cache.get("https://petstore3.swagger.io/api/v3/openapi.json") is doc
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, source: str) -> Optional[dict[str, Any]]:
        """Look up a resolved document.

        Args:
            source: The exact source string the document was stored under.

        Returns:
            The stored document (identical object), or ``None`` on a miss.
        """
        with self._lock:
            doc = self._entries.get(source)
            if doc is None:
                self._misses += 1
            else:
                self._hits += 1
            return doc

    def set(self, source: str, document: dict[str, Any]) -> None:
        """Store *document* under *source*, replacing any previous entry."""
        with self._lock:
            self._entries[source] = document

    def invalidate(self, source: Optional[str] = None) -> None:
        """Remove the entry for *source*, or every entry when *source* is ``None``.

        Invalidating a key that is not cached is a no-op.
        """
        with self._lock:
            if source is None:
                self._entries.clear()
            else:
                self._entries.pop(source, None)

    def clear(self) -> None:
        """Remove all entries from the cache."""
        self.invalidate(None)

    def __contains__(self, source: object) -> bool:
        with self._lock:
            return source in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``size`` (number of entries), ``sources`` (the
            cached keys in insertion order), ``hits``, and ``misses``.
        """
        with self._lock:
            return {
                "size": len(self._entries),
                "sources": list(self._entries),
                "hits": self._hits,
                "misses": self._misses,
            }
