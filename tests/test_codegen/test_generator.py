"""Tests for swagger_mcp.codegen.generator."""

from __future__ import annotations

from typing import Any

import pytest

from swagger_mcp.codegen.generator import (
    generate_client_code,
    path_to_function_name,
    schema_to_type,
)
from swagger_mcp.exceptions import InvalidUsageError
from swagger_mcp.parser.extractor import get_endpoint_detail
from swagger_mcp.parser.resolver import resolve_refs


# ---------------------------------------------------------------------------
# schema_to_type
# ---------------------------------------------------------------------------


class TestSchemaToType:
    @pytest.mark.parametrize(
        "schema, expected",
        [
            ({"type": "string"}, "string"),
            ({"type": "integer"}, "number"),
            ({"type": "number"}, "number"),
            ({"type": "boolean"}, "boolean"),
            ({"type": "array", "items": {"type": "string"}}, "string[]"),
            ({"type": "array"}, "unknown[]"),
            ({"type": "object"}, "Record<string, unknown>"),
            ({"type": ["string", "null"]}, "string"),
            ({}, "unknown"),
            (None, "unknown"),
        ],
    )
    def test_primitives(self, schema: Any, expected: str) -> None:
        assert schema_to_type(schema) == expected

    def test_string_enum_becomes_literal_union(self) -> None:
        schema = {"type": "string", "enum": ["available", "it's"]}
        assert schema_to_type(schema) == "'available' | 'it\\'s'"

    def test_mixed_enum_stays_string(self) -> None:
        assert schema_to_type({"type": "string", "enum": ["a", 1]}) == "string"

    def test_object_with_properties(self) -> None:
        schema = {
            "type": "object",
            "required": ["id"],
            "properties": {"id": {"type": "integer"}, "display-name": {"type": "string"}},
        }
        assert schema_to_type(schema) == "{\n  id: number;\n  'display-name'?: string;\n}"

    def test_nested_object_indentation(self) -> None:
        schema = {"properties": {"owner": {"properties": {"name": {"type": "string"}}}}}
        assert schema_to_type(schema) == "{\n  owner?: {\n    name?: string;\n  };\n}"

    def test_additional_properties_record(self) -> None:
        schema = {"type": "object", "additionalProperties": {"type": "integer"}}
        assert schema_to_type(schema) == "Record<string, number>"

    def test_one_of_union(self) -> None:
        schema = {"oneOf": [{"type": "string"}, {"type": "integer"}, {"type": "number"}]}
        assert schema_to_type(schema) == "string | number"

    def test_all_of_intersection(self) -> None:
        schema = {"allOf": [{"$ref": "#/components/schemas/Base"}, {"$ref": "#/components/schemas/Extra"}]}
        assert schema_to_type(schema) == "Base & Extra"

    def test_union_inside_array_is_parenthesized(self) -> None:
        schema = {"type": "array", "items": {"anyOf": [{"type": "string"}, {"type": "boolean"}]}}
        assert schema_to_type(schema) == "(string | boolean)[]"

    def test_ref_uses_schema_name(self) -> None:
        assert schema_to_type({"$ref": "#/definitions/Category"}) == "Category"

    def test_boolean_required_makes_properties_optional(self) -> None:
        schema = {"type": "object", "required": True, "properties": {"id": {"type": "integer"}}}
        assert schema_to_type(schema) == "{\n  id?: number;\n}"

    def test_cycle_point_ref_keeps_schema_name(self) -> None:
        spec = {
            "definitions": {
                "Node": {"type": "object", "properties": {"next": {"$ref": "#/definitions/Node"}}}
            }
        }
        node = resolve_refs(spec)["definitions"]["Node"]
        assert schema_to_type(node) == "{\n  next?: {\n    next?: Node;\n  };\n}"

    def test_jsdoc_mode(self) -> None:
        assert schema_to_type({"type": "object"}, typescript=False) == "object"
        assert schema_to_type({}, typescript=False) == "any"


# ---------------------------------------------------------------------------
# path_to_function_name
# ---------------------------------------------------------------------------


class TestPathToFunctionName:
    @pytest.mark.parametrize(
        "method, path, expected",
        [
            ("get", "/users/{id}", "getUsersByid"),
            ("post", "/pets", "postPets"),
            ("delete", "/pet/{petId}/upload-image", "deletePetBypetidUploadImage"),
            ("get", "/", "get"),
        ],
    )
    def test_names(self, method: str, path: str, expected: str) -> None:
        assert path_to_function_name(method, path) == expected


# ---------------------------------------------------------------------------
# generate_client_code
# ---------------------------------------------------------------------------


class TestGenerateTypeScript:
    def test_axios_get_with_path_and_response(self, oas3_doc: dict[str, Any]) -> None:
        detail = get_endpoint_detail(oas3_doc, "get", "/pets/{petId}")
        result = generate_client_code(detail, base_url_hint="https://api.petstore.example.com/v1")
        code = result.code

        assert result.endpoint == "GET /pets/{petId}"
        assert result.language == "typescript"
        assert result.http_client == "axios"
        assert code.startswith("import axios, { AxiosResponse } from 'axios';\n")
        assert "interface GetPetsBypetidPathParams {\n  petId: string;\n}" in code
        assert "interface GetPetsBypetidResponse {" in code
        assert (
            "export async function getPetsBypetid(pathParams: GetPetsBypetidPathParams): "
            "Promise<AxiosResponse<GetPetsBypetidResponse>> {" in code
        )
        assert "const url = `${BASE_URL}/pets/${pathParams.petId}`;" in code
        assert "return axios.get(url);" in code
        assert " * Info for a specific pet" in code
        assert code.rstrip().endswith("// const BASE_URL = 'https://api.petstore.example.com/v1';")

    def test_query_params_optional_unless_required(self, oas3_doc: dict[str, Any]) -> None:
        code = generate_client_code(get_endpoint_detail(oas3_doc, "get", "/pets")).code
        assert "  limit?: number;" in code
        assert "  status?: 'available' | 'pending' | 'sold';" in code
        assert "return axios.get(url, { params: queryParams });" in code
        # an array of objects is a type alias, not an interface
        assert "type GetPetsResponse = {\n" in code
        assert "}[];" in code

    def test_post_body_declaration(self, oas3_doc: dict[str, Any]) -> None:
        code = generate_client_code(get_endpoint_detail(oas3_doc, "post", "/pets")).code
        assert "interface PostPetsRequest {\n  name: string;\n  tag?: string;\n}" in code
        assert "export async function postPets(data: PostPetsRequest)" in code
        assert "return axios.post(url, data);" in code
        # 201 is used when there is no 200
        assert "Promise<AxiosResponse<PostPetsResponse>>" in code

    def test_fetch_client(self, oas3_doc: dict[str, Any]) -> None:
        detail = get_endpoint_detail(oas3_doc, "post", "/pets")
        code = generate_client_code(detail, http_client="fetch").code
        assert "import axios" not in code
        assert "): Promise<Response> {" in code
        assert "return fetch(url, {" in code
        assert "method: 'POST'," in code
        assert "body: JSON.stringify(data)," in code

    def test_fetch_with_query(self, oas3_doc: dict[str, Any]) -> None:
        code = generate_client_code(
            get_endpoint_detail(oas3_doc, "get", "/pets"), http_client="fetch"
        ).code
        assert "new URLSearchParams(queryParams as unknown as Record<string, string>)" in code
        assert "return fetch(`${url}?${params}`, {" in code

    def test_duplicate_parameters_collapse(self, swagger2_doc: dict[str, Any]) -> None:
        code = generate_client_code(get_endpoint_detail(swagger2_doc, "get", "/pet/{petId}")).code
        assert code.count("  petId: number;") == 1

    def test_no_success_response(self, swagger2_doc: dict[str, Any]) -> None:
        code = generate_client_code(get_endpoint_detail(swagger2_doc, "post", "/pet")).code
        assert "PostPetResponse" not in code
        assert "Promise<AxiosResponse> {" in code


class TestGenerateJavaScript:
    def test_no_type_declarations(self, oas3_doc: dict[str, Any]) -> None:
        detail = get_endpoint_detail(oas3_doc, "post", "/pets")
        result = generate_client_code(detail, language="javascript")
        code = result.code
        assert result.language == "javascript"
        assert "interface" not in code
        assert "import axios from 'axios';" in code
        assert " * @param {object} data" in code
        assert "export async function postPets(data) {" in code

    def test_jsdoc_params(self, oas3_doc: dict[str, Any]) -> None:
        detail = get_endpoint_detail(oas3_doc, "get", "/pets/{petId}")
        code = generate_client_code(detail, language="javascript", http_client="fetch").code
        assert " * @param {object} pathParams" in code
        assert "export async function getPetsBypetid(pathParams) {" in code
        assert "method: 'GET'," in code


class TestGenerateErrors:
    def test_unknown_language(self, oas3_doc: dict[str, Any]) -> None:
        detail = get_endpoint_detail(oas3_doc, "get", "/pets")
        with pytest.raises(InvalidUsageError, match="Unsupported language 'python'"):
            generate_client_code(detail, language="python")

    def test_unknown_client(self, oas3_doc: dict[str, Any]) -> None:
        detail = get_endpoint_detail(oas3_doc, "get", "/pets")
        with pytest.raises(InvalidUsageError, match="Unsupported HTTP client"):
            generate_client_code(detail, http_client="got")
