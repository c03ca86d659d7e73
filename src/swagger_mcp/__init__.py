"""swagger-mcp -- an MCP server for exploring Swagger 2.0 and OpenAPI 3.x APIs.

The server exposes tools and resources that let an MCP client pick an API
description (by alias from ``swagger-targets.json`` or by direct URL/path),
browse and search its endpoints, read schemas, fire test requests, render
equivalent cURL commands, and generate client code stubs.

Typical workflow (from the MCP client's side)::

    swagger_select_service(name="petstore")
    swagger_search(keyword="pet")
    swagger_get_endpoint(method="get", path="/pets/{petId}")
    swagger_test(method="GET", path="/pets/{petId}", path_params={"petId": 1})

Modules:
    app: Typer entry point that starts the stdio server.
    models: Pydantic models shared across the entire package.
    config: ``swagger-targets.json`` discovery and the service registry.
    session: The current service selection.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stderr-only diagnostics with Rich support.
"""

__version__ = "0.1.0"
