"""Tests for swagger_mcp.client.response."""

from __future__ import annotations

import httpx
import pytest

from swagger_mcp.client.response import (
    extract_response_data,
    is_json_content_type,
    response_headers,
)


def _response(content: bytes, content_type: str | None = None, **kwargs) -> httpx.Response:
    headers = kwargs.pop("headers", [])
    if content_type:
        headers = [("content-type", content_type), *headers]
    return httpx.Response(200, content=content, headers=headers, **kwargs)


class TestIsJsonContentType:
    @pytest.mark.parametrize(
        "value",
        ["application/json", "application/json; charset=utf-8", "application/problem+json", "APPLICATION/JSON"],
    )
    def test_json(self, value: str) -> None:
        assert is_json_content_type(value)

    @pytest.mark.parametrize("value", ["", "text/plain", "text/json-ish", "application/xml"])
    def test_not_json(self, value: str) -> None:
        assert not is_json_content_type(value)


class TestExtractResponseData:
    def test_json_body(self) -> None:
        response = _response(b'{"id": 1}', "application/json")
        assert extract_response_data(response) == {"id": 1}

    def test_problem_json(self) -> None:
        response = _response(b'{"title": "Bad"}', "application/problem+json")
        assert extract_response_data(response) == {"title": "Bad"}

    def test_invalid_json_falls_back_to_text(self) -> None:
        response = _response(b"{not json", "application/json")
        assert extract_response_data(response) == "{not json"

    def test_text_body(self) -> None:
        response = _response(b"hello", "text/plain")
        assert extract_response_data(response) == "hello"

    def test_json_without_content_type_stays_text(self) -> None:
        assert extract_response_data(_response(b'{"a": 1}')) == '{"a": 1}'

    def test_empty_body(self) -> None:
        assert extract_response_data(_response(b"", "application/json")) == ""


class TestResponseHeaders:
    def test_flattens_repeated_headers(self) -> None:
        response = _response(
            b"",
            headers=[("set-cookie", "a=1"), ("set-cookie", "b=2"), ("x-id", "7")],
        )
        headers = response_headers(response)
        assert headers["set-cookie"] == "a=1, b=2"
        assert headers["x-id"] == "7"
