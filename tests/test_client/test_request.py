"""Tests for URL building and cURL rendering."""

from __future__ import annotations

import shlex

import pytest

from swagger_mcp.client.request import (
    CURL_SEPARATOR,
    build_query_string,
    build_url,
    encode_component,
    generate_curl,
    has_header,
    render_body,
    substitute_path,
)
from swagger_mcp.models import RequestSpec


def _request(**kwargs) -> RequestSpec:
    kwargs.setdefault("base_url", "https://api.example.com")
    kwargs.setdefault("path", "/pets")
    return RequestSpec(**kwargs)


# ---------------------------------------------------------------------------
# Encoding and substitution
# ---------------------------------------------------------------------------


class TestEncodeComponent:
    @pytest.mark.parametrize(
        "raw, encoded",
        [
            ("abc-_.!~*'()", "abc-_.!~*'()"),
            ("a b", "a%20b"),
            ("x/y", "x%2Fy"),
            ("?&=#", "%3F%26%3D%23"),
            ("ü", "%C3%BC"),
        ],
    )
    def test_encodes_like_encode_uri_component(self, raw: str, encoded: str) -> None:
        assert encode_component(raw) == encoded


class TestSubstitutePath:
    def test_brace_placeholder(self) -> None:
        assert substitute_path("/users/{id}", {"id": "42"}) == "/users/42"

    def test_colon_placeholder(self) -> None:
        assert substitute_path("/users/:id/posts", {"id": "7"}) == "/users/7/posts"

    def test_every_occurrence(self) -> None:
        assert substitute_path("/{id}/copy/{id}", {"id": "a"}) == "/a/copy/a"

    def test_values_are_encoded(self) -> None:
        assert substitute_path("/files/{name}", {"name": "a b/c"}) == "/files/a%20b%2Fc"

    def test_unknown_placeholder_left_verbatim(self) -> None:
        assert substitute_path("/users/{id}/:tab", {}) == "/users/{id}/:tab"

    def test_colon_inside_segment_is_literal(self) -> None:
        assert substitute_path("/v1/items:batchGet", {"batchGet": "x"}) == "/v1/items:batchGet"


class TestBuildUrl:
    def test_trailing_slash_on_base_is_dropped(self) -> None:
        request = _request(base_url="https://api.example.com/v1/", path="/pets")
        assert build_url(request) == "https://api.example.com/v1/pets"

    def test_query_string(self) -> None:
        request = _request(query_params={"limit": 10, "q": "a&b", "flag": True})
        assert build_url(request) == "https://api.example.com/pets?limit=10&q=a%26b&flag=true"

    def test_none_query_values_are_dropped(self) -> None:
        request = _request(query_params={"limit": None})
        assert build_url(request) == "https://api.example.com/pets"

    def test_path_params(self) -> None:
        request = _request(path="/pets/{petId}", path_params={"petId": 5})
        assert build_url(request) == "https://api.example.com/pets/5"

    def test_empty_query_string(self) -> None:
        assert build_query_string({}) == ""


# ---------------------------------------------------------------------------
# Bodies and headers
# ---------------------------------------------------------------------------


class TestBodiesAndHeaders:
    def test_has_header_is_case_insensitive(self) -> None:
        assert has_header({"content-TYPE": "text/plain"}, "Content-Type")
        assert not has_header({"Accept": "*/*"}, "Content-Type")

    def test_render_string_verbatim(self) -> None:
        assert render_body("name=Rex") == "name=Rex"

    def test_render_json(self) -> None:
        assert render_body({"name": "Rex"}) == '{\n  "name": "Rex"\n}'


# ---------------------------------------------------------------------------
# generate_curl
# ---------------------------------------------------------------------------


class TestGenerateCurl:
    def test_simple_get(self) -> None:
        assert generate_curl(_request()) == "curl" + CURL_SEPARATOR + "https://api.example.com/pets"

    def test_post_with_json_body(self) -> None:
        curl = generate_curl(_request(method="post", body={"name": "Rex"}))
        parts = curl.split(CURL_SEPARATOR)
        assert parts[0] == "curl"
        assert parts[1] == "-X POST"
        assert parts[2] == "-H 'Content-Type: application/json'"
        assert parts[3].startswith("-d '{")
        assert parts[-1] == "https://api.example.com/pets"

    def test_explicit_content_type_not_duplicated(self) -> None:
        curl = generate_curl(
            _request(method="PUT", headers={"content-type": "text/plain"}, body="hello")
        )
        assert curl.lower().count("content-type") == 1
        assert "-d hello" in curl

    def test_headers_in_insertion_order(self) -> None:
        curl = generate_curl(_request(headers={"X-B": "2", "X-A": "1"}))
        assert curl.index("X-B: 2") < curl.index("X-A: 1")

    def test_quotes_shell_metacharacters(self) -> None:
        curl = generate_curl(_request(method="POST", body="it's"))
        data_part = curl.split(CURL_SEPARATOR)[3]
        assert shlex.split(data_part) == ["-d", "it's"]

    def test_url_is_quoted_when_it_has_query(self) -> None:
        curl = generate_curl(_request(query_params={"a": "1", "b": "2"}))
        assert curl.endswith("'https://api.example.com/pets?a=1&b=2'")

    def test_is_deterministic(self) -> None:
        request = _request(method="PATCH", headers={"Authorization": "Bearer t"}, body=[1, 2])
        assert generate_curl(request) == generate_curl(request)

    def test_falsy_body_is_still_sent(self) -> None:
        curl = generate_curl(_request(method="POST", body=0))
        assert "-d 0" in curl
