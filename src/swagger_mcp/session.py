"""The current service selection.

Exactly one API description is "selected" at a time; every endpoint, schema,
test, and code-generation tool works against it. :class:`SessionState`
holds that selection and owns the rules for changing it:

* A selection is validated *before* it is committed: the document is
  re-fetched (bypassing the cache), dereferenced, and summarized. If any of
  that fails the previous selection stays in place.
* Selections that overlap in time commit last-writer-wins on *start* order:
  a slower selection that began earlier never overwrites a newer one that
  already committed, and raises :class:`StaleSelectionError` instead.

The session is created once by :func:`~swagger_mcp.app.serve` and reached
through :class:`~swagger_mcp.tools.context.ServerContext`; there is no
module-level state.
"""

from __future__ import annotations

import itertools
import threading
from typing import Any, Optional

from swagger_mcp.exceptions import NoServiceSelectedError, StaleSelectionError
from swagger_mcp.models import ServiceSelection, SpecSummary
from swagger_mcp.output import debug
from swagger_mcp.parser.dialect import summarize
from swagger_mcp.parser.document import DocumentResolver


class SessionState:
    """Holds the selected service.

    Args:
        resolver: Used to fetch and cache the selected document.

    Example::

        session = SessionState(DocumentResolver())
        session.select("https://petstore.swagger.io/v2/swagger.json")
        doc = session.document()
    """

    def __init__(self, resolver: DocumentResolver) -> None:
        self._resolver = resolver
        self._selection: Optional[ServiceSelection] = None
        self._lock = threading.Lock()
        self._tickets = itertools.count(1)
        self._committed_ticket = 0

    @property
    def resolver(self) -> DocumentResolver:
        return self._resolver

    def select(
        self,
        source: str,
        base_url: Optional[str] = None,
        alias: Optional[str] = None,
    ) -> SpecSummary:
        """Load *source* and make it the current selection.

        Args:
            source: URL or file path of the description.
            base_url: Overrides the base URL derived from the document.
            alias: The configured alias *source* came from, if any.

        Returns:
            The summary of the newly selected document.

        Raises:
            SpecFetchError: If the document cannot be fetched or parsed.
            SpecRefError: If a ``$ref`` cannot be dereferenced.
            UnsupportedSpecError: If the document is neither dialect.
            StaleSelectionError: If a selection that started later (or a
                :meth:`clear`) committed while this one was loading.
        """
        with self._lock:
            ticket = next(self._tickets)

        document = self._resolver.resolve(source, use_cache=False)
        summary = summarize(document)
        selection = ServiceSelection(
            source=source,
            base_url_override=base_url,
            alias=alias,
            summary=summary,
        )

        with self._lock:
            stale = ticket <= self._committed_ticket
            if not stale:
                self._selection = selection
                self._committed_ticket = ticket
        if stale:
            debug(f"Discarded stale selection of {alias or source}")
            raise StaleSelectionError(
                f"Selection of {alias or source} was superseded by a newer selection; "
                "use swagger_get_current to see the selected service"
            )
        debug(f"Selected {alias or source}")
        return summary

    def current(self) -> Optional[ServiceSelection]:
        """The current selection, or ``None``."""
        with self._lock:
            return self._selection

    def require(self) -> ServiceSelection:
        """The current selection.

        Raises:
            NoServiceSelectedError: If nothing is selected.
        """
        selection = self.current()
        if selection is None:
            raise NoServiceSelectedError()
        return selection

    def document(self) -> dict[str, Any]:
        """The resolved document of the current selection (from cache when possible).

        Raises:
            NoServiceSelectedError: If nothing is selected.
        """
        return self._resolver.resolve(self.require().source)

    def refresh(self) -> SpecSummary:
        """Re-fetch the current selection's document and update its summary.

        The cached document is replaced only when the re-fetch succeeds, so
        a failed refresh leaves the selection fully usable.

        Raises:
            NoServiceSelectedError: If nothing is selected.
        """
        selection = self.require()
        return self.select(
            selection.source,
            base_url=selection.base_url_override,
            alias=selection.alias,
        )

    def clear(self) -> None:
        """Forget the current selection."""
        with self._lock:
            self._selection = None
            self._committed_ticket = next(self._tickets)
