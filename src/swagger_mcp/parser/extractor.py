"""Extract endpoints, parameters, request bodies, and responses from resolved documents.

This module walks a fully ``$ref``-resolved document and produces the
dialect-independent models from :mod:`swagger_mcp.models`. Swagger 2.0 and
OpenAPI 3.x inputs yield the same shapes:

* ``_extract_parameters`` -- OpenAPI 3 reads type/format/default/enum from
  the parameter's ``schema``; Swagger 2 reads them from the parameter
  itself.
* ``_lift_swagger_body`` -- Swagger 2 ``in: body`` parameters (and, when
  there is no body parameter, ``in: formData`` parameters) become a
  :class:`~swagger_mcp.models.RequestBody`, never a
  :class:`~swagger_mcp.models.Parameter`.
* ``_extract_responses`` -- Swagger 2 single ``schema`` responses are
  wrapped under ``application/json``.

Path-level parameters are listed before operation-level ones and are
**not** deduplicated: a parameter declared at both levels appears twice.
Security follows the override rule: an operation-level ``security`` array
(even an empty one) replaces the document-level one.

The public functions are :func:`list_endpoints`,
:func:`get_endpoint_detail`, and :func:`search_endpoints`. None of them
modify the document.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Union

from swagger_mcp.exceptions import NotFoundError
from swagger_mcp.models import (
    EndpointDetail,
    EndpointSummary,
    HTTPMethod,
    MediaType,
    Parameter,
    ParameterLocation,
    RequestBody,
    ResponseSpec,
    SpecDialect,
)
from swagger_mcp.parser.dialect import require_dialect

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"
MULTIPART_MEDIA_TYPE = "multipart/form-data"

_LOCATIONS = frozenset(loc.value for loc in ParameterLocation)


def list_endpoints(doc: dict[str, Any], tag: Optional[str] = None) -> list[EndpointSummary]:
    """List every endpoint, optionally restricted to one tag.

    Paths are visited in document order and, within a path, methods in
    :class:`~swagger_mcp.models.HTTPMethod` order.

    Args:
        doc: A resolved document.
        tag: When given, keep only endpoints whose ``tags`` contain this
            exact (case-sensitive) string.

    Raises:
        UnsupportedSpecError: If *doc* is neither dialect.
    """
    require_dialect(doc)
    endpoints = [_summary(path, method, op) for path, method, _, op in _iter_operations(doc)]
    if tag is not None:
        endpoints = [ep for ep in endpoints if tag in ep.tags]
    return endpoints


def search_endpoints(doc: dict[str, Any], keyword: str) -> list[EndpointSummary]:
    """Case-insensitive substring search over path, summary, description, operationId, and tags.

    Results keep :func:`list_endpoints` order.
    """
    needle = keyword.lower()
    matches: list[EndpointSummary] = []
    for endpoint in list_endpoints(doc):
        haystack = [
            endpoint.path,
            endpoint.summary or "",
            endpoint.description or "",
            endpoint.operation_id or "",
            *endpoint.tags,
        ]
        if any(needle in field.lower() for field in haystack):
            matches.append(endpoint)
    return matches


def get_endpoint_detail(
    doc: dict[str, Any],
    method: Union[HTTPMethod, str],
    path: str,
) -> EndpointDetail:
    """Return the full detail of the operation at (*method*, *path*).

    *path* must match a key of ``paths`` literally; ``{id}`` and ``{petId}``
    are different paths.

    Raises:
        NotFoundError: If the path or the method on it does not exist.
        UnsupportedSpecError: If *doc* is neither dialect.
    """
    dialect = require_dialect(doc)
    method_name = method.value if isinstance(method, HTTPMethod) else str(method).lower()
    not_found = NotFoundError(f"Endpoint not found: {method_name.upper()} {path}")

    try:
        http_method = HTTPMethod(method_name)
    except ValueError:
        raise not_found from None

    path_item = (doc.get("paths") or {}).get(path)
    if not isinstance(path_item, dict):
        raise not_found
    operation = path_item.get(http_method.value)
    if not isinstance(operation, dict):
        raise not_found

    raw_params = _param_list(path_item.get("parameters")) + _param_list(operation.get("parameters"))

    if dialect is SpecDialect.OPENAPI_V3:
        parameters = [p for p in map(_openapi_parameter, raw_params) if p is not None]
        request_body = _openapi_request_body(operation.get("requestBody"))
    else:
        parameters = [p for p in map(_swagger_parameter, raw_params) if p is not None]
        request_body = _lift_swagger_body(raw_params, operation, doc)

    security = operation.get("security")
    if security is None:
        security = doc.get("security")

    summary = _summary(path, http_method, operation)
    return EndpointDetail(
        **summary.model_dump(),
        parameters=parameters,
        request_body=request_body,
        responses=_extract_responses(operation.get("responses"), dialect),
        security=security,
    )


# --- Iteration ---


def _iter_operations(
    doc: dict[str, Any],
) -> Iterator[tuple[str, HTTPMethod, dict[str, Any], dict[str, Any]]]:
    """Yield ``(path, method, path_item, operation)`` for every operation."""
    paths = doc.get("paths") or {}
    if not isinstance(paths, dict):
        return
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method in HTTPMethod:
            operation = path_item.get(method.value)
            if isinstance(operation, dict):
                yield str(path), method, path_item, operation


def _summary(path: str, method: HTTPMethod, operation: dict[str, Any]) -> EndpointSummary:
    tags = operation.get("tags") or []
    return EndpointSummary(
        method=method,
        path=path,
        operation_id=operation.get("operationId"),
        summary=operation.get("summary"),
        description=operation.get("description"),
        tags=[t for t in tags if isinstance(t, str)],
        deprecated=operation.get("deprecated"),
    )


def _param_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [p for p in value if isinstance(p, dict)]


# --- Parameters ---


def _openapi_parameter(param: dict[str, Any]) -> Optional[Parameter]:
    """Convert an OpenAPI 3 parameter; ``None`` for unknown locations.

    A parameter described with ``content`` instead of ``schema`` uses the
    schema of its first media type.
    """
    location = param.get("in")
    if location not in _LOCATIONS:
        return None

    schema = param.get("schema")
    if not isinstance(schema, dict):
        schema = _first_media_schema(param.get("content"))

    example = param.get("example")
    if example is None:
        example = schema.get("example")

    return Parameter(
        name=str(param.get("name", "")),
        location=ParameterLocation(location),
        required=param.get("required"),
        description=param.get("description"),
        type=_schema_type(schema),
        format=schema.get("format"),
        default=schema.get("default"),
        example=example,
        enum_values=schema.get("enum"),
    )


def _swagger_parameter(param: dict[str, Any]) -> Optional[Parameter]:
    """Convert a Swagger 2 parameter; ``None`` for body, formData, and unknown locations."""
    location = param.get("in")
    if location not in _LOCATIONS:
        return None

    return Parameter(
        name=str(param.get("name", "")),
        location=ParameterLocation(location),
        required=param.get("required"),
        description=param.get("description"),
        type=_schema_type(param),
        format=param.get("format"),
        default=param.get("default"),
        example=param.get("x-example"),
        enum_values=param.get("enum"),
    )


def _schema_type(schema: dict[str, Any]) -> Optional[str]:
    """Return the ``type`` of *schema*.

    Handles OpenAPI 3.1 type arrays (e.g., ``["string", "null"]``) by
    returning the first non-null type.
    """
    type_value = schema.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        return str(non_null[0]) if non_null else None
    return str(type_value) if type_value is not None else None


def _first_media_schema(content: Any) -> dict[str, Any]:
    if isinstance(content, dict):
        for media in content.values():
            if isinstance(media, dict) and isinstance(media.get("schema"), dict):
                return media["schema"]
    return {}


# --- Request bodies ---


def _media_map(content: Any) -> dict[str, MediaType]:
    """Copy schema and example for every media type in an OpenAPI 3 ``content`` map."""
    if not isinstance(content, dict):
        return {}
    result: dict[str, MediaType] = {}
    for media_type, media in content.items():
        if not isinstance(media, dict):
            media = {}
        schema = media.get("schema")
        result[str(media_type)] = MediaType(
            schema_=schema if isinstance(schema, dict) else None,
            example=media.get("example"),
        )
    return result


def _openapi_request_body(body: Any) -> Optional[RequestBody]:
    if not isinstance(body, dict):
        return None
    return RequestBody(
        description=body.get("description"),
        required=body.get("required"),
        content=_media_map(body.get("content")),
    )


def _lift_swagger_body(
    params: list[dict[str, Any]],
    operation: dict[str, Any],
    doc: dict[str, Any],
) -> Optional[RequestBody]:
    """Build a request body from Swagger 2 ``body`` or ``formData`` parameters.

    The first ``in: body`` parameter wins. Without one, all ``in: formData``
    parameters are gathered into an object schema, sent as
    ``multipart/form-data`` when a field is a file or the operation consumes
    multipart, else as ``application/x-www-form-urlencoded``.
    """
    for param in params:
        if param.get("in") == "body":
            schema = param.get("schema")
            return RequestBody(
                description=param.get("description"),
                required=param.get("required"),
                content={
                    JSON_MEDIA_TYPE: MediaType(schema_=schema if isinstance(schema, dict) else None)
                },
            )

    form_params = [p for p in params if p.get("in") == "formData"]
    if not form_params:
        return None

    properties: dict[str, Any] = {}
    required: list[str] = []
    is_multipart = False
    for param in form_params:
        name = str(param.get("name", ""))
        field = {
            key: param[key]
            for key in ("type", "format", "description", "default", "enum", "items")
            if key in param
        }
        properties[name] = field
        if param.get("required"):
            required.append(name)
        if param.get("type") == "file":
            is_multipart = True

    consumes = operation.get("consumes") or doc.get("consumes") or []
    if MULTIPART_MEDIA_TYPE in consumes:
        is_multipart = True

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required

    return RequestBody(
        required=bool(required) or None,
        content={
            (MULTIPART_MEDIA_TYPE if is_multipart else FORM_MEDIA_TYPE): MediaType(schema_=schema)
        },
    )


# --- Responses ---


def _extract_responses(responses: Any, dialect: SpecDialect) -> dict[str, ResponseSpec]:
    """Normalize the ``responses`` map, keyed by status code string."""
    if not isinstance(responses, dict):
        return {}

    result: dict[str, ResponseSpec] = {}
    for status_code, response in responses.items():
        if not isinstance(response, dict):
            continue

        if dialect is SpecDialect.OPENAPI_V3:
            content = _media_map(response.get("content"))
        else:
            content = {}
            schema = response.get("schema")
            if isinstance(schema, dict):
                examples = response.get("examples") or {}
                content[JSON_MEDIA_TYPE] = MediaType(
                    schema_=schema,
                    example=examples.get(JSON_MEDIA_TYPE) if isinstance(examples, dict) else None,
                )

        result[str(status_code)] = ResponseSpec(
            description=response.get("description"),
            content=content or None,
        )

    return result
