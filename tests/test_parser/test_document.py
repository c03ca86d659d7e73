"""Tests for swagger_mcp.parser.document."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from swagger_mcp.cache import DocumentCache
from swagger_mcp.exceptions import SpecFetchError, SpecRefError
from swagger_mcp.parser.document import DocumentResolver
from swagger_mcp.parser.loader import load_spec


class _CountingLoader:
    """Loader that records every source it is asked for."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, source: str) -> dict[str, Any]:
        self.calls.append(source)
        return load_spec(source)


class TestDocumentResolver:
    def test_resolves_refs(self, oas3_path: str) -> None:
        doc = DocumentResolver().resolve(oas3_path)
        schema = doc["paths"]["/pets"]["post"]["requestBody"]["content"]["application/json"]["schema"]
        assert schema["required"] == ["name"]

    def test_cache_hit_returns_identical_object(self, oas3_path: str) -> None:
        loader = _CountingLoader()
        resolver = DocumentResolver(loader=loader)

        first = resolver.resolve(oas3_path)
        second = resolver.resolve(oas3_path)

        assert first is second
        assert loader.calls == [oas3_path]

    def test_bypass_cache_refetches_and_replaces(self, oas3_path: str) -> None:
        loader = _CountingLoader()
        cache = DocumentCache()
        resolver = DocumentResolver(cache, loader=loader)

        first = resolver.resolve(oas3_path)
        fresh = resolver.resolve(oas3_path, use_cache=False)

        assert fresh is not first
        assert fresh == first
        assert cache.get(oas3_path) is fresh
        assert len(loader.calls) == 2

    def test_keys_are_verbatim(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "api.json").write_text(json.dumps({"openapi": "3.0.0"}), encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        resolver = DocumentResolver()

        resolver.resolve("api.json")
        resolver.resolve("./api.json")

        assert resolver.cache.stats()["sources"] == ["api.json", "./api.json"]

    def test_invalidate_forces_reload(self, oas3_path: str) -> None:
        loader = _CountingLoader()
        resolver = DocumentResolver(loader=loader)
        resolver.resolve(oas3_path)

        resolver.invalidate(oas3_path)
        resolver.resolve(oas3_path)

        assert len(loader.calls) == 2

    def test_fetch_failure_is_not_cached(self, tmp_path: Path) -> None:
        resolver = DocumentResolver()
        missing = str(tmp_path / "missing.json")
        with pytest.raises(SpecFetchError):
            resolver.resolve(missing)
        assert missing not in resolver.cache

    def test_strict_cycles(self, oas3_path: str) -> None:
        with pytest.raises(SpecRefError, match="Circular"):
            DocumentResolver(allow_circular=False).resolve(oas3_path)

    def test_external_refs_relative_to_source(self, tmp_path: Path) -> None:
        (tmp_path / "main.json").write_text(
            json.dumps({"swagger": "2.0", "definitions": {"Pet": {"$ref": "models.json#/Pet"}}}),
            encoding="utf-8",
        )
        (tmp_path / "models.json").write_text(
            json.dumps({"Pet": {"type": "object"}}), encoding="utf-8"
        )
        doc = DocumentResolver().resolve(str(tmp_path / "main.json"))
        assert doc["definitions"]["Pet"] == {"type": "object"}
