"""Generate TypeScript / JavaScript client functions for a single endpoint.

The generator takes an :class:`~swagger_mcp.models.EndpointDetail` and
renders a self-contained client function using either ``axios`` or the
``fetch`` API:

1. Schemas are translated to type expressions with :func:`schema_to_type`.
2. For TypeScript, path parameters, query parameters, the JSON request
   body, and the first successful JSON response (``200``, then ``201``,
   then ``default``) each get a named declaration.
3. A Jinja2 template (``codegen/templates/``) lays out imports,
   declarations, the JSDoc block, and the function body.

Generated code references a ``BASE_URL`` constant that the caller is
expected to define; a trailing comment says so.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from swagger_mcp.exceptions import InvalidUsageError
from swagger_mcp.models import (
    EndpointDetail,
    GeneratedCode,
    HTTPMethod,
    Parameter,
    ParameterLocation,
)

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``codegen/templates/``)."""

LANGUAGES = ("typescript", "javascript")
HTTP_CLIENTS = ("axios", "fetch")

_TEMPLATES = {
    "typescript": "function.ts.j2",
    "javascript": "function.js.j2",
}

_BODY_METHODS = frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH})
_SUCCESS_STATUSES = ("200", "201", "default")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_BRACE_PLACEHOLDER = re.compile(r"\{([^{}/]+)\}")


# --- Schema translation ---


def schema_to_type(schema: Any, typescript: bool = True, indent: int = 0) -> str:
    """Translate a JSON Schema into a TypeScript type expression.

    With ``typescript=False`` the result is meant for JSDoc annotations:
    property-less objects become ``object`` and unknown shapes ``any``.

    * ``$ref`` (only left at cycle points after dereferencing) -- the last
      segment of the pointer, i.e. the schema name. Generated snippets do
      not declare that type; the caller is expected to declare it (or
      replace it with ``unknown``) next to the pasted code.
    * ``oneOf`` / ``anyOf`` -- a union; ``allOf`` -- an intersection.
    * ``string`` -- ``string``, or a literal union for string enums.
    * ``integer`` / ``number`` -- ``number``; ``boolean`` -- ``boolean``.
    * ``array`` -- ``T[]``.
    * ``object`` with properties -- an inline ``{ ... }`` block; properties
      not listed in ``required`` are optional.
    * ``object`` without properties -- ``Record<string, unknown>`` (or a
      typed record when ``additionalProperties`` is a schema).
    * anything else, including a missing schema -- ``unknown`` / ``any``.

    Args:
        schema: The schema to translate.
        typescript: Target TypeScript (``True``) or JSDoc (``False``).
        indent: Nesting depth, used to indent inline object blocks.
    """
    fallback = "unknown" if typescript else "any"
    if not isinstance(schema, dict):
        return fallback

    ref = schema.get("$ref")
    if isinstance(ref, str):
        return ref.rstrip("/").rsplit("/", 1)[-1] or fallback

    for keyword, joiner in (("oneOf", " | "), ("anyOf", " | "), ("allOf", " & ")):
        members = schema.get(keyword)
        if isinstance(members, list) and members:
            parts: list[str] = []
            for member in members:
                part = schema_to_type(member, typescript, indent)
                if part not in parts:
                    parts.append(part)
            if len(parts) == 1:
                return parts[0]
            return joiner.join(_parenthesize(part) for part in parts)

    schema_type = _primary_type(schema)

    if schema_type == "string":
        enum_values = schema.get("enum")
        if isinstance(enum_values, list) and enum_values and all(
            isinstance(v, str) for v in enum_values
        ):
            return " | ".join(_quote(v) for v in enum_values)
        return "string"
    if schema_type in ("integer", "number"):
        return "number"
    if schema_type == "boolean":
        return "boolean"
    if schema_type == "array":
        return f"{_parenthesize(schema_to_type(schema.get('items'), typescript, indent))}[]"
    if schema_type == "object" or "properties" in schema:
        return _object_type(schema, typescript, indent)

    return fallback


def _object_type(schema: dict[str, Any], typescript: bool, indent: int) -> str:
    properties = schema.get("properties")
    if not isinstance(properties, dict) or not properties:
        additional = schema.get("additionalProperties")
        if typescript and isinstance(additional, dict) and additional:
            return f"Record<string, {schema_to_type(additional, typescript, indent)}>"
        return "Record<string, unknown>" if typescript else "object"

    required = schema.get("required")
    if not isinstance(required, list):
        # draft-3 style "required: true" on the object itself
        required = []
    pad = "  " * (indent + 1)
    lines = []
    for key, value in properties.items():
        optional = "" if key in required else "?"
        prop_type = schema_to_type(value, typescript, indent + 1)
        lines.append(f"{pad}{_property_key(str(key))}{optional}: {prop_type};")
    return "{\n" + "\n".join(lines) + "\n" + "  " * indent + "}"


def _primary_type(schema: dict[str, Any]) -> Optional[str]:
    """First non-null entry of an OpenAPI 3.1 type array, or the plain ``type``."""
    type_value = schema.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        return non_null[0] if non_null else None
    return type_value if isinstance(type_value, str) else None


def _parenthesize(type_expr: str) -> str:
    if (" | " in type_expr or " & " in type_expr) and not type_expr.startswith("{"):
        return f"({type_expr})"
    return type_expr


def _quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _property_key(key: str) -> str:
    return key if _IDENTIFIER.match(key) else _quote(key)


# --- Naming ---


def path_to_function_name(method: HTTPMethod | str, path: str) -> str:
    """Build a camelCase function name from a method and a path template.

    ``{name}`` placeholders become ``By<name>``; every other
    non-alphanumeric character separates words.

    Example::

        >>> path_to_function_name("get", "/users/{id}")
        'getUsersByid'
    """
    method_name = method.value if isinstance(method, HTTPMethod) else str(method).lower()
    clean = _BRACE_PLACEHOLDER.sub(r"By\1", path)
    words = re.sub(r"[^a-zA-Z0-9]", " ", clean).split()
    camel = "".join(
        word.lower() if i == 0 else word[:1].upper() + word[1:].lower()
        for i, word in enumerate(words)
    )
    return method_name + camel[:1].upper() + camel[1:]


# --- Rendering ---


def generate_client_code(
    detail: EndpointDetail,
    language: str = "typescript",
    http_client: str = "axios",
    base_url_hint: str = "http://localhost:8080",
) -> GeneratedCode:
    """Render a client function for *detail*.

    Args:
        detail: The endpoint to generate code for.
        language: ``"typescript"`` or ``"javascript"``.
        http_client: ``"axios"`` or ``"fetch"``.
        base_url_hint: Example value shown in the trailing ``BASE_URL``
            comment.

    Returns:
        The rendered code with the endpoint label, language, and client.

    Raises:
        InvalidUsageError: If *language* or *http_client* is not supported.
    """
    if language not in LANGUAGES:
        raise InvalidUsageError(
            f"Unsupported language '{language}'. Choose one of: {', '.join(LANGUAGES)}"
        )
    if http_client not in HTTP_CLIENTS:
        raise InvalidUsageError(
            f"Unsupported HTTP client '{http_client}'. Choose one of: {', '.join(HTTP_CLIENTS)}"
        )

    typescript = language == "typescript"
    method = detail.method
    func_name = path_to_function_name(method, detail.path)
    type_prefix = func_name[:1].upper() + func_name[1:]

    path_params = _unique(p for p in detail.parameters if p.location is ParameterLocation.PATH)
    query_params = _unique(p for p in detail.parameters if p.location is ParameterLocation.QUERY)
    has_body = method in _BODY_METHODS

    declarations: list[str] = []
    params: list[str] = []
    jsdoc_params: list[str] = []
    response_name: Optional[str] = None

    if path_params:
        name = f"{type_prefix}PathParams"
        members = [f"  {_property_key(p.name)}: {_parameter_type(p)};" for p in path_params]
        declarations.append(_interface(name, members))
        params.append(f"pathParams: {name}" if typescript else "pathParams")
        jsdoc_params.append("{object} pathParams")

    if query_params:
        name = f"{type_prefix}QueryParams"
        members = [
            f"  {_property_key(p.name)}{'' if p.required else '?'}: {_parameter_type(p)};"
            for p in query_params
        ]
        declarations.append(_interface(name, members))
        params.append(f"queryParams: {name}" if typescript else "queryParams")
        jsdoc_params.append("{object} queryParams")

    if has_body:
        name = f"{type_prefix}Request"
        body_schema = _json_schema(detail.request_body.content if detail.request_body else None)
        declarations.append(_declaration(name, schema_to_type(body_schema)))
        params.append(f"data: {name}" if typescript else "data")
        jsdoc_type = schema_to_type(body_schema, typescript=False)
        jsdoc_params.append(f"{{{'object' if _is_object_block(jsdoc_type) else jsdoc_type}}} data")

    response_schema = _success_schema(detail)
    if response_schema is not None:
        response_name = f"{type_prefix}Response"
        declarations.append(_declaration(response_name, schema_to_type(response_schema)))

    env = _create_jinja_env()
    template = env.get_template(_TEMPLATES[language])
    code = template.render(
        http_client=http_client,
        declarations=declarations if typescript else [],
        doc_lines=_doc_lines(detail),
        jsdoc_params=jsdoc_params,
        func_name=func_name,
        params=params,
        return_type=_return_type(http_client, response_name),
        url_path=_template_path(detail.path),
        method=method.value,
        method_upper=method.value.upper(),
        has_body=has_body,
        has_query=bool(query_params),
        base_url_hint=base_url_hint,
    )

    return GeneratedCode(
        code=code,
        endpoint=f"{method.value.upper()} {detail.path}",
        language=language,
        http_client=http_client,
    )


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for code templates.

    Autoescape is disabled for the ``.ts.j2`` and ``.js.j2`` templates,
    which produce source code, not HTML. Block trimming and lstrip are
    enabled for cleaner template authoring.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2", "js.j2")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _unique(params: Any) -> list[Parameter]:
    """Collapse parameters repeated at path and operation level (last one wins)."""
    by_name: dict[str, Parameter] = {}
    for param in params:
        by_name.pop(param.name, None)
        by_name[param.name] = param
    return list(by_name.values())


def _parameter_type(param: Parameter) -> str:
    if param.type is None:
        return "string"
    return schema_to_type({"type": param.type, "enum": param.enum_values})


def _interface(name: str, members: list[str]) -> str:
    return "\n".join([f"interface {name} {{", *members, "}"])


def _declaration(name: str, type_expr: str) -> str:
    if _is_object_block(type_expr):
        return f"interface {name} {type_expr}"
    return f"type {name} = {type_expr};"


def _is_object_block(type_expr: str) -> bool:
    return type_expr.startswith("{") and type_expr.endswith("}")


def _json_schema(content: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Schema of the JSON media type in *content* (``application/json`` first)."""
    if not content:
        return None
    media = content.get("application/json")
    if media is None:
        media = next((m for key, m in content.items() if "json" in key), None)
    return media.schema_ if media is not None else None


def _success_schema(detail: EndpointDetail) -> Optional[dict[str, Any]]:
    for status in _SUCCESS_STATUSES:
        response = detail.responses.get(status)
        if response is not None:
            return _json_schema(response.content)
    return None


def _return_type(http_client: str, response_name: Optional[str]) -> str:
    if http_client == "fetch":
        return "Promise<Response>"
    if response_name:
        return f"Promise<AxiosResponse<{response_name}>>"
    return "Promise<AxiosResponse>"


def _template_path(path: str) -> str:
    """Rewrite ``{name}`` placeholders as template-literal references to ``pathParams``."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if _IDENTIFIER.match(name):
            return f"${{pathParams.{name}}}"
        return f"${{pathParams[{_quote(name)}]}}"

    return _BRACE_PLACEHOLDER.sub(_replace, path.replace("`", "\\`"))


def _doc_lines(detail: EndpointDetail) -> list[str]:
    """JSDoc body lines: the summary (or ``METHOD /path``), then the description."""
    summary = detail.summary or f"{detail.method.value.upper()} {detail.path}"
    lines = [summary]
    if detail.description:
        lines.extend(detail.description.strip().splitlines())
    return [f" * {line}".rstrip().replace("*/", "*\\/") for line in lines]
