"""Client code stub generation.

:func:`generate_client_code` renders a TypeScript or JavaScript function
(``axios`` or ``fetch``) for one endpoint from Jinja2 templates in
``codegen/templates/``; :func:`schema_to_type` is the schema-to-type
translation it is built on.
"""

from swagger_mcp.codegen.generator import (
    generate_client_code,
    path_to_function_name,
    schema_to_type,
)

__all__ = ["generate_client_code", "path_to_function_name", "schema_to_type"]
