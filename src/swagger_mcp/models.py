"""Canonical Pydantic models shared across all swagger-mcp modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration models** -- loaded from ``swagger-targets.json`` and the
environment:
    :class:`ServiceTarget` and :class:`ServerSettings`.

**Normalized API description models** -- produced by the extractor and
dialect normalizer, identical for Swagger 2.0 and OpenAPI 3.x inputs:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`SpecDialect`,
    :class:`EndpointSummary`, :class:`Parameter`, :class:`MediaType`,
    :class:`RequestBody`, :class:`ResponseSpec`, :class:`EndpointDetail`,
    and :class:`SpecSummary`.

**Session and HTTP models** -- used by the session state and the test
client:
    :class:`ServiceSelection`, :class:`RequestSpec`,
    :class:`ExecutionResult`, and :class:`GeneratedCode`.

Models that are returned to MCP clients derive from :class:`WireModel`,
whose :meth:`~WireModel.to_wire` renders camelCase keys
(``operationId``, ``statusText``, ...) and drops unset optional fields.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models serialised to MCP clients with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict using aliases, omitting ``None`` fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Enumerations ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised on a path item.

    Declaration order is the order endpoints are listed in.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    OPTIONS = "options"
    HEAD = "head"


class ParameterLocation(str, enum.Enum):
    """Locations where a parameter can appear, per the ``in`` field."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class SpecDialect(str, enum.Enum):
    """Which description format a resolved document is written in."""

    OPENAPI_V3 = "openapi_v3"
    SWAGGER_V2 = "swagger_v2"
    UNKNOWN = "unknown"


# --- Configuration ---


class ServiceTarget(WireModel):
    """One alias entry from ``swagger-targets.json``.

    The file accepts either a bare string (``"petstore": "./petstore.yaml"``)
    or an object (``{"spec": "...", "baseUrl": "..."}``); both forms are
    normalised into this model by :mod:`swagger_mcp.config`.
    """

    name: str
    spec: str
    base_url: Optional[str] = None


class ServerSettings(BaseModel):
    """Process-wide settings read from the environment at startup.

    The targets file location is not a setting:
    :class:`~swagger_mcp.config.ServiceRegistry` discovers it from
    ``--config`` and ``SWAGGER_MCP_CONFIG``.
    """

    timeout_ms: int = Field(default=30000, gt=0)


# --- Normalized description ---


class EndpointSummary(WireModel):
    """A single (method, path) pair with its descriptive metadata."""

    method: HTTPMethod
    path: str
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    deprecated: Optional[bool] = None


class Parameter(WireModel):
    """A path, query, header, or cookie parameter.

    Swagger 2.0 ``body`` and ``formData`` parameters never become a
    :class:`Parameter`; the extractor lifts them into :class:`RequestBody`.
    """

    name: str
    location: ParameterLocation = Field(alias="in")
    required: Optional[bool] = None
    description: Optional[str] = None
    type: Optional[str] = None
    format: Optional[str] = None
    default: Any = None
    example: Any = None
    enum_values: Optional[list[Any]] = Field(default=None, alias="enum")


class MediaType(WireModel):
    """Schema and example for one media type (``application/json``, ...)."""

    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    example: Any = None


class RequestBody(WireModel):
    """Normalized request body, keyed by media type."""

    description: Optional[str] = None
    required: Optional[bool] = None
    content: dict[str, MediaType] = Field(default_factory=dict)


class ResponseSpec(WireModel):
    """One declared response. ``content`` is omitted when no media types exist."""

    description: Optional[str] = None
    content: Optional[dict[str, MediaType]] = None


class EndpointDetail(EndpointSummary):
    """Full detail of one endpoint: parameters, body, responses, security."""

    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = None
    responses: dict[str, ResponseSpec] = Field(default_factory=dict)
    security: Optional[list[dict[str, Any]]] = None


class SpecSummary(WireModel):
    """High-level overview of a selected document."""

    title: str
    version: str
    description: Optional[str] = None
    spec_version: str
    servers: list[str] = Field(default_factory=list)
    endpoint_count: int = 0
    tags: Optional[list[str]] = None


# --- Session / HTTP ---


class ServiceSelection(BaseModel):
    """The current selection held by :class:`~swagger_mcp.session.SessionState`."""

    source: str
    base_url_override: Optional[str] = None
    alias: Optional[str] = None
    summary: SpecSummary


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RequestSpec(BaseModel):
    """Everything needed to render a cURL command or execute a test request.

    Path parameters, query parameters, and headers accept scalars and are
    normalised to strings on construction (booleans become ``true`` /
    ``false``).
    """

    base_url: str
    method: str = "GET"
    path: str
    path_params: dict[str, str] = Field(default_factory=dict)
    query_params: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None
    timeout_ms: int = Field(default=30000, gt=0)

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, enum.Enum):
            value = value.value
        return value.upper() if isinstance(value, str) else value

    @field_validator("path_params", "query_params", "headers", mode="before")
    @classmethod
    def _stringify_values(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): _stringify(v) for k, v in value.items() if v is not None}
        return value


class ExecutionResult(WireModel):
    """Outcome of a test request.

    ``status == 0`` with ``status_text == "Request Failed"`` signals a
    transport failure (timeout, DNS, refused connection); ``body`` then
    carries ``{"error": <message>}``.
    """

    status: int
    status_text: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None
    duration_ms: int = 0
    curl: str = ""

    @property
    def failed(self) -> bool:
        """``True`` when the request never produced an HTTP response."""
        return self.status == 0


class GeneratedCode(WireModel):
    """A rendered client stub plus the endpoint it was generated for."""

    code: str
    endpoint: str
    language: str
    http_client: str
