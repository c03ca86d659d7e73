"""Asynchronous execution of test requests.

:class:`ApiClient` wraps :class:`httpx.AsyncClient` and turns a
:class:`~swagger_mcp.models.RequestSpec` into an
:class:`~swagger_mcp.models.ExecutionResult`. It never raises for transport
problems: timeouts, DNS failures, refused connections, and malformed URLs
all come back as a result with ``status == 0`` and
``status_text == "Request Failed"``. There are no retries; a test request
is sent exactly once.

The request targets :func:`~swagger_mcp.client.request.build_url`, the same
URL that :func:`~swagger_mcp.client.request.generate_curl` prints, and the
rendered cURL command is attached to every result.
"""

from __future__ import annotations

import time
from typing import Optional

import httpx

from swagger_mcp.client.request import build_url, generate_curl, has_header, render_body
from swagger_mcp.client.response import extract_response_data, response_headers
from swagger_mcp.models import ExecutionResult, RequestSpec
from swagger_mcp.output import debug

REQUEST_FAILED = "Request Failed"

_BODYLESS_METHODS = frozenset({"GET", "HEAD"})


class ApiClient:
    """Asynchronous HTTP client for test requests.

    Must be used as an async context manager.

    Args:
        transport: Optional transport for the underlying
            :class:`httpx.AsyncClient` (tests pass an
            :class:`httpx.MockTransport`).

    Example::

        async with ApiClient() as client:
            result = await client.execute(
                RequestSpec(base_url="https://petstore.swagger.io/v2", path="/pet/{petId}",
                            path_params={"petId": 1})
            )
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> ApiClient:
        self._client = httpx.AsyncClient(transport=self._transport, follow_redirects=True)
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    async def execute(self, request: RequestSpec) -> ExecutionResult:
        """Send *request* once and describe the outcome.

        A ``Content-Type: application/json`` header is added when a body is
        present and none was given. The body is not sent for GET and HEAD.
        The whole exchange is bounded by ``request.timeout_ms``.
        """
        assert self._client is not None, "ApiClient must be used as an async context manager"

        url = build_url(request)
        curl = generate_curl(request)
        headers = dict(request.headers)
        content: Optional[str] = None
        if request.body is not None:
            if not has_header(headers, "content-type"):
                headers["Content-Type"] = "application/json"
            if request.method not in _BODYLESS_METHODS:
                content = render_body(request.body)

        debug(f"{request.method} {url}")
        start = time.perf_counter()
        try:
            response = await self._client.request(
                request.method,
                url,
                headers=headers,
                content=content,
                timeout=httpx.Timeout(request.timeout_ms / 1000),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return ExecutionResult(
                status=0,
                status_text=REQUEST_FAILED,
                headers={},
                body={"error": _describe(exc)},
                duration_ms=_elapsed_ms(start),
                curl=curl,
            )

        return ExecutionResult(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=response_headers(response),
            body=extract_response_data(response),
            duration_ms=_elapsed_ms(start),
            curl=curl,
        )


async def execute_request(
    request: RequestSpec,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ExecutionResult:
    """Execute a single request with a short-lived :class:`ApiClient`."""
    async with ApiClient(transport=transport) as client:
        return await client.execute(request)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _describe(exc: Exception) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return f"Request timed out: {exc}" if str(exc) else "Request timed out"
    return str(exc) or type(exc).__name__
