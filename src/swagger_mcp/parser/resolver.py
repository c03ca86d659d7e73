"""Resolve ``$ref`` JSON Reference pointers in Swagger / OpenAPI documents.

Descriptions commonly use ``$ref`` pointers (e.g.,
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition. This module
performs a recursive traversal of the document, building a new tree in
which every ``$ref`` is replaced with the object it points to. The input
document is never modified.

Supported reference forms:

* **Internal** -- ``#/definitions/Pet``, resolved against the document that
  contains the reference. RFC 6901 escaping (``~0``, ``~1``) and
  percent-encoding in the fragment are honoured; list indices are
  accepted.
* **External** -- ``common.yaml``, ``common.yaml#/Error``,
  ``https://example.com/shared.json#/Error``. Relative targets are resolved
  against the location of the referencing document (URL join for remote
  documents, parent directory for local files). Each external document is
  loaded once per :func:`resolve_refs` call, and pointers inside it
  resolve against it rather than against the root.

Circular references are detected via a ``seen`` set of
``(document, pointer)`` pairs currently on the resolution stack. By default
the ``$ref`` dict is kept as-is at the cycle point -- the only finite
representation of a recursive schema. Passing ``allow_circular=False``
turns a cycle into a :class:`~swagger_mcp.exceptions.SpecRefError`.

The single public function is :func:`resolve_refs`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Optional
from urllib.parse import unquote, urljoin

from swagger_mcp.exceptions import SpecFetchError, SpecRefError
from swagger_mcp.parser.loader import is_url, load_spec

Loader = Callable[[str], dict[str, Any]]

_ROOT = ""


def resolve_refs(
    spec: dict[str, Any],
    base: Optional[str] = None,
    allow_circular: bool = True,
    loader: Loader = load_spec,
) -> dict[str, Any]:
    """Resolve all ``$ref`` pointers in *spec*.

    Args:
        spec: The raw document, as returned by
            :func:`~swagger_mcp.parser.loader.load_spec`.
        base: The URL or file path *spec* was loaded from. Relative external
            references are resolved against it; when ``None`` they are
            resolved against the current working directory.
        allow_circular: Keep the ``$ref`` dict at cycle points when ``True``
            (the default); raise when ``False``.
        loader: Callable used to fetch external documents.

    Returns:
        A **new** dictionary with all ``$ref`` pointers replaced by their
        targets (except at cycle points, see above).

    Raises:
        SpecRefError: If a pointer does not exist in its target document, an
            external document cannot be loaded, a ``$ref`` value is not a
            string, or a cycle is found with ``allow_circular=False``.

    Example::

        raw = load_spec("petstore.yaml")
        resolved = resolve_refs(raw, base="petstore.yaml")
        # resolved["paths"]["/pets"]["get"]["responses"]["200"]
        # now contains the inlined schema instead of a $ref pointer.
    """
    return _RefWalker(spec, base, allow_circular, loader).walk()


class _RefWalker:
    """Holds the per-call state of one :func:`resolve_refs` run."""

    def __init__(
        self,
        root: dict[str, Any],
        base: Optional[str],
        allow_circular: bool,
        loader: Loader,
    ) -> None:
        if base and not is_url(base):
            base = os.path.normpath(base)
        self._root_key = base or _ROOT
        self._documents: dict[str, Any] = {self._root_key: root}
        self._allow_circular = allow_circular
        self._loader = loader

    def walk(self) -> dict[str, Any]:
        return self._deep_resolve(self._documents[self._root_key], self._root_key, frozenset())

    def _deep_resolve(self, obj: Any, doc_key: str, seen: frozenset[tuple[str, str]]) -> Any:
        """Recursively resolve all ``$ref`` pointers within *obj*.

        ``seen`` is rebuilt (never mutated) at each reference, so sibling
        branches that reach the same target do not see each other's visits.
        """
        if isinstance(obj, dict):
            if "$ref" in obj:
                ref = obj["$ref"]
                if not isinstance(ref, str):
                    raise SpecRefError(f"Invalid $ref value: {ref!r} (expected a string)")

                target_key, fragment = self._split(ref, doc_key)
                marker = (target_key, fragment)
                if marker in seen:
                    if self._allow_circular:
                        return dict(obj)
                    raise SpecRefError(f"Circular $ref detected: {ref}")

                target_doc = self._document(target_key, ref)
                resolved = _resolve_pointer(fragment, target_doc, ref)
                return self._deep_resolve(resolved, target_key, seen | {marker})

            return {key: self._deep_resolve(value, doc_key, seen) for key, value in obj.items()}

        if isinstance(obj, list):
            return [self._deep_resolve(item, doc_key, seen) for item in obj]

        return obj

    def _split(self, ref: str, doc_key: str) -> tuple[str, str]:
        """Split *ref* into the absolute key of its document and its fragment."""
        location, _, fragment = ref.partition("#")
        if not location:
            return doc_key, fragment
        return _join(doc_key, location), fragment

    def _document(self, key: str, ref: str) -> Any:
        if key not in self._documents:
            try:
                self._documents[key] = self._loader(key)
            except SpecFetchError as exc:
                raise SpecRefError(f"Cannot load external $ref '{ref}': {exc}") from exc
        return self._documents[key]


def _join(doc_key: str, location: str) -> str:
    """Resolve *location* relative to the document identified by *doc_key*."""
    if is_url(location):
        return location
    if is_url(doc_key):
        return urljoin(doc_key, location)
    if os.path.isabs(location):
        return os.path.normpath(location)
    parent = Path(doc_key).parent if doc_key else Path(".")
    return os.path.normpath(str(parent / location))


def _resolve_pointer(fragment: str, document: Any, ref: str) -> Any:
    """Navigate *document* along the JSON Pointer in *fragment*.

    An empty fragment addresses the whole document. A numeric segment that
    is missing as a string key falls back to the matching integer key.

    Raises:
        SpecRefError: If the fragment is not a JSON Pointer, or any segment
            does not exist.
    """
    if fragment == "":
        return document
    if not fragment.startswith("/"):
        raise SpecRefError(
            f"Cannot resolve $ref '{ref}': only JSON Pointer fragments (#/...) are supported"
        )

    current: Any = document
    for raw_segment in fragment[1:].split("/"):
        # RFC 6901: ~1 before ~0, after percent-decoding
        segment = unquote(raw_segment).replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment in current:
                current = current[segment]
            elif segment.isdigit() and int(segment) in current:
                # YAML loads unquoted response codes as int keys
                current = current[int(segment)]
            else:
                raise SpecRefError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found at path"
                )
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecRefError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecRefError(
                f"Cannot resolve $ref '{ref}': cannot navigate into {type(current).__name__}"
            )

    return current
