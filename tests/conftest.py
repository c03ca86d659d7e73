"""Shared test fixtures for swagger-mcp.

Provides reusable fixtures for loading the API description fixtures,
creating isolated config environments, managing output state, and wiring
a :class:`~swagger_mcp.tools.context.ServerContext` for tool tests. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from swagger_mcp.config import ServiceRegistry
from swagger_mcp.models import ServerSettings
from swagger_mcp.output import reset_output
from swagger_mcp.parser.resolver import resolve_refs
from swagger_mcp.tools.context import ServerContext


FIXTURES_DIR = Path(__file__).parent / "fixtures"
OAS3_PATH = FIXTURES_DIR / "petstore_oas3.json"
SWAGGER2_PATH = FIXTURES_DIR / "petstore_swagger2.json"
MINIMAL_PATH = FIXTURES_DIR / "minimal.yaml"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches a reference to sys.stderr at creation time.
    When pytest's capture swaps that stream between tests the cached
    reference becomes stale, so a fresh manager is created on next use.
    """
    yield
    reset_output()


@pytest.fixture
def anyio_backend() -> str:
    """Run ``@pytest.mark.anyio`` tests on asyncio only."""
    return "asyncio"


# ---------------------------------------------------------------------------
# Raw and resolved description fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def oas3_raw() -> dict[str, Any]:
    """Load the raw OpenAPI 3.0 petstore dict."""
    with open(OAS3_PATH) as f:
        return json.load(f)


@pytest.fixture
def swagger2_raw() -> dict[str, Any]:
    """Load the raw Swagger 2.0 petstore dict."""
    with open(SWAGGER2_PATH) as f:
        return json.load(f)


@pytest.fixture
def oas3_doc(oas3_raw: dict[str, Any]) -> dict[str, Any]:
    """The OpenAPI 3.0 petstore with every $ref resolved."""
    return resolve_refs(oas3_raw)


@pytest.fixture
def swagger2_doc(swagger2_raw: dict[str, Any]) -> dict[str, Any]:
    """The Swagger 2.0 petstore with every $ref resolved."""
    return resolve_refs(swagger2_raw)


@pytest.fixture
def oas3_path() -> str:
    return str(OAS3_PATH)


@pytest.fixture
def swagger2_path() -> str:
    return str(SWAGGER2_PATH)


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty working directory with a private home directory.

    No ``swagger-targets.json`` is visible unless the test writes one, and
    the ``SWAGGER_MCP_*`` environment variables are cleared.

    Returns:
        The temporary working directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SWAGGER_MCP_CONFIG", raising=False)
    monkeypatch.delenv("SWAGGER_MCP_TIMEOUT_MS", raising=False)
    monkeypatch.chdir(work)
    return work


def write_targets(directory: Path, data: Any) -> Path:
    """Write *data* as ``swagger-targets.json`` in *directory* and return its path."""
    path = directory / "swagger-targets.json"
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Server context
# ---------------------------------------------------------------------------


ContextFactory = Callable[..., ServerContext]


@pytest.fixture
def make_context(isolated_config: Path) -> ContextFactory:
    """Factory for a :class:`ServerContext` rooted in :func:`isolated_config`.

    Keyword Args:
        targets: Optional targets mapping written to the working directory.
        handler: Optional request handler wrapped in an
            :class:`httpx.MockTransport` for test requests.
        timeout_ms: Optional settings timeout.
    """

    def _factory(
        targets: Optional[dict[str, Any]] = None,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
        timeout_ms: int = 30000,
    ) -> ServerContext:
        if targets is not None:
            write_targets(isolated_config, targets)
        transport = httpx.MockTransport(handler) if handler is not None else None
        return ServerContext.create(
            ServiceRegistry(),
            settings=ServerSettings(timeout_ms=timeout_ms),
            transport=transport,
        )

    return _factory
