"""OpenAPI document parser -- load, validate, and resolve ``$ref`` pointers.

This sub-package turns a raw OpenAPI 3.x document (JSON or YAML, local file,
remote URL or stdin) into a typed, reference-resolved
:class:`~specir.parser.document.OpenApiSpec` that the transformer consumes.

Typical usage::

    from specir.parser import load_document, resolve_refs

    spec = load_document("openapi.yaml")
    resolved = resolve_refs(spec)

Sub-modules:

* :mod:`~specir.parser.document` -- Pydantic models of the OpenAPI object model.
* :mod:`~specir.parser.loader` -- I/O layer plus format detection and version
  validation.
* :mod:`~specir.parser.resolver` -- ``$ref`` resolution with cycle tolerance.
"""

from specir.parser.document import OpenApiSpec, Schema
from specir.parser.loader import (
    from_json,
    from_yaml,
    load_document,
    load_spec,
    parse_spec,
    validate_openapi_version,
)
from specir.parser.resolver import RefResolver, parse_ref_name, resolve_refs

__all__ = [
    "OpenApiSpec",
    "RefResolver",
    "Schema",
    "from_json",
    "from_yaml",
    "load_document",
    "load_spec",
    "parse_ref_name",
    "parse_spec",
    "resolve_refs",
    "validate_openapi_version",
]
