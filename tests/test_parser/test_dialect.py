"""Tests for swagger_mcp.parser.dialect."""

from __future__ import annotations

from typing import Any

import pytest

from swagger_mcp.exceptions import UnsupportedSpecError
from swagger_mcp.models import SpecDialect
from swagger_mcp.parser.dialect import (
    LOCALHOST,
    classify,
    extract_base_url,
    require_dialect,
    schemas_of,
    server_urls,
    summarize,
)


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------


class TestClassify:
    def test_openapi(self, oas3_raw: dict[str, Any]) -> None:
        assert classify(oas3_raw) is SpecDialect.OPENAPI_V3

    def test_swagger(self, swagger2_raw: dict[str, Any]) -> None:
        assert classify(swagger2_raw) is SpecDialect.SWAGGER_V2

    def test_openapi_wins_over_swagger(self) -> None:
        assert classify({"openapi": "3.1.0", "swagger": "2.0"}) is SpecDialect.OPENAPI_V3

    @pytest.mark.parametrize("doc", [{}, {"info": {}}, [], "openapi", None])
    def test_unknown(self, doc: Any) -> None:
        assert classify(doc) is SpecDialect.UNKNOWN

    def test_require_dialect_rejects_unknown(self) -> None:
        with pytest.raises(UnsupportedSpecError, match="openapi"):
            require_dialect({"asyncapi": "2.0.0"})


# ---------------------------------------------------------------------------
# server_urls
# ---------------------------------------------------------------------------


class TestServerUrls:
    def test_openapi_servers_with_variables(self, oas3_doc: dict[str, Any]) -> None:
        assert server_urls(oas3_doc) == [
            "https://api.petstore.example.com/v1",
            "http://localhost:8080/v1",
        ]

    def test_variable_without_default_is_kept(self) -> None:
        doc = {"openapi": "3.0.0", "servers": [{"url": "https://{region}.x.io", "variables": {}}]}
        assert server_urls(doc) == ["https://{region}.x.io"]

    def test_openapi_without_servers(self) -> None:
        assert server_urls({"openapi": "3.0.0"}) == []

    def test_swagger_first_scheme_host_base_path(self, swagger2_doc: dict[str, Any]) -> None:
        assert server_urls(swagger2_doc) == ["https://petstore.swagger.io/v2"]

    def test_swagger_defaults(self) -> None:
        assert server_urls({"swagger": "2.0"}) == ["http://localhost"]


# ---------------------------------------------------------------------------
# schemas_of
# ---------------------------------------------------------------------------


class TestSchemasOf:
    def test_components_schemas(self, oas3_doc: dict[str, Any]) -> None:
        assert list(schemas_of(oas3_doc)) == ["Pet", "NewPet", "Category", "Error"]

    def test_definitions(self, swagger2_doc: dict[str, Any]) -> None:
        assert list(schemas_of(swagger2_doc)) == ["Pet", "ApiResponse"]

    def test_missing_is_empty_dict(self) -> None:
        assert schemas_of({"openapi": "3.0.0", "components": {}}) == {}
        assert schemas_of({"swagger": "2.0"}) == {}


# ---------------------------------------------------------------------------
# summarize
# ---------------------------------------------------------------------------


class TestSummarize:
    def test_openapi_summary(self, oas3_doc: dict[str, Any]) -> None:
        summary = summarize(oas3_doc)
        assert summary.title == "Petstore"
        assert summary.version == "1.0.0"
        assert summary.description == "A sample pet store API"
        assert summary.spec_version == "OpenAPI 3.0.3"
        assert summary.endpoint_count == 5
        assert summary.tags == ["pet", "store"]

    def test_swagger_summary(self, swagger2_doc: dict[str, Any]) -> None:
        summary = summarize(swagger2_doc)
        assert summary.spec_version == "Swagger 2.0"
        assert summary.servers == ["https://petstore.swagger.io/v2"]
        assert summary.endpoint_count == 6
        assert summary.description is None

    def test_defaults_for_sparse_document(self) -> None:
        summary = summarize({"openapi": "3.1.0"})
        assert summary.title == "Untitled API"
        assert summary.version == ""
        assert summary.endpoint_count == 0
        assert summary.tags is None

    def test_wire_form_uses_camel_case(self, oas3_doc: dict[str, Any]) -> None:
        wire = summarize(oas3_doc).to_wire()
        assert wire["specVersion"] == "OpenAPI 3.0.3"
        assert wire["endpointCount"] == 5


# ---------------------------------------------------------------------------
# extract_base_url
# ---------------------------------------------------------------------------


class TestExtractBaseUrl:
    def test_absolute_server(self) -> None:
        assert extract_base_url(["https://api.x.io/v1", "http://b"], "spec.json") == "https://api.x.io/v1"

    def test_relative_server_joined_to_source_origin(self) -> None:
        assert (
            extract_base_url(["/api/v3"], "https://petstore3.swagger.io/api/v3/openapi.json")
            == "https://petstore3.swagger.io/api/v3"
        )

    def test_relative_server_for_file_source(self) -> None:
        assert extract_base_url(["/v1"], "./specs/api.yaml") == f"{LOCALHOST}/v1"

    def test_path_relative_server_joined_to_document_location(self) -> None:
        assert (
            extract_base_url(["v2"], "https://x.io/docs/openapi.json") == "https://x.io/docs/v2"
        )

    def test_no_servers_uses_source_origin(self) -> None:
        assert extract_base_url([], "http://localhost:3000/swagger.json") == "http://localhost:3000"

    def test_no_servers_file_source(self) -> None:
        assert extract_base_url([], "/tmp/api.json") == LOCALHOST
