"""Resolve ``$ref`` pointers in a parsed OpenAPI document.

Only component references of the form ``#/components/<section>/<name>`` are
supported. Parameter, request body and response references are replaced by
their targets. Schema references are *expanded*: the target's content is
inlined, but the expanded node keeps the pointer it came from in
:attr:`~specir.parser.document.Schema.ref` so that later stages can still
refer to the declaration by name.

Circular schema references are detected with a working set of pointers
currently being expanded. A pointer met again while it is in the working set
is returned unexpanded, so a ``Node`` whose ``children`` are ``Node`` items
stays finite. When a component schema is itself resolved, its own pointer is
seeded into the working set, which keeps the ``Node`` declaration from being
inlined into itself.

The input document is never mutated; every changed node is a ``model_copy``.
"""

from __future__ import annotations

import logging
from typing import Union

from specir.exceptions import (
    InvalidRefFormatError,
    RefTargetNotFoundError,
    ResolveError,
)
from specir.parser.document import (
    Components,
    MediaType,
    OpenApiSpec,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    Schema,
    SecurityScheme,
)

logger = logging.getLogger(__name__)

_COMPONENTS_PREFIX = "#/components/"

# Pointer section -> Components attribute
_SECTIONS = {
    "schemas": "schemas",
    "parameters": "parameters",
    "requestBodies": "request_bodies",
    "responses": "responses",
    "securitySchemes": "security_schemes",
}

_Component = Union[Schema, Parameter, RequestBody, Response, SecurityScheme]


def resolve_refs(spec: OpenApiSpec) -> OpenApiSpec:
    """Return a copy of *spec* with every ``$ref`` resolved.

    Raises:
        InvalidRefFormatError: If a pointer is not a component reference into
            the section expected at its position.
        RefTargetNotFoundError: If a pointer names a missing component.
    """
    return RefResolver(spec).resolve_spec()


def parse_ref_name(ref: str, section: str) -> str:
    """Return the component name of *ref*, checking it points into *section*.

    Handles RFC 6901 escaping (``~1`` for ``/``, ``~0`` for ``~``).

    Raises:
        InvalidRefFormatError: If *ref* is not ``#/components/<section>/<name>``.
    """
    if not ref.startswith(_COMPONENTS_PREFIX):
        raise InvalidRefFormatError(ref, "expected #/components/<section>/<name>")

    parts = ref[len(_COMPONENTS_PREFIX):].split("/")
    if len(parts) != 2 or not parts[1]:
        raise InvalidRefFormatError(ref, "expected #/components/<section>/<name>")
    if parts[0] != section:
        raise InvalidRefFormatError(ref, f"expected a reference into components/{section}")

    return _unescape(parts[1])


def ref_target_name(ref: str) -> str:
    """Last segment of a pointer, unescaped. Empty when there is none."""
    return _unescape(ref.rstrip("/").rsplit("/", 1)[-1]) if "/" in ref else ""


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


class RefResolver:
    """Resolves references of one document.

    A resolver carries the working set used for cycle detection, so an
    instance must not be shared between threads.
    """

    def __init__(self, spec: OpenApiSpec):
        self._spec = spec
        self._components = spec.components or Components()
        # Pointer -> depth in the working set.
        self._expanding: dict[str, int] = {}
        # Expansions that met no cycle outside themselves, by pointer.
        self._expanded: dict[str, Schema] = {}
        # Shallowest working-set depth cut by the expansion in progress.
        self._shallowest_cut = 0

    def resolve_spec(self) -> OpenApiSpec:
        paths = {
            path: self._resolve_path_item(item)
            for path, item in self._spec.paths.items()
        }
        update: dict = {"paths": paths}
        if self._spec.components is not None:
            update["components"] = self._resolve_components()
        return self._spec.model_copy(update=update)

    # --- Components ---

    def _resolve_components(self) -> Components:
        components = self._components
        return components.model_copy(
            update={
                "schemas": {
                    name: self.resolve_component_schema(name, schema)
                    for name, schema in components.schemas.items()
                },
                "parameters": {
                    name: self.resolve_parameter(param)
                    for name, param in components.parameters.items()
                },
                "request_bodies": {
                    name: self.resolve_request_body(body)
                    for name, body in components.request_bodies.items()
                },
                "responses": {
                    name: self.resolve_response(response)
                    for name, response in components.responses.items()
                },
                "security_schemes": {
                    name: self._lookup(scheme.ref, "securitySchemes") if scheme.ref else scheme
                    for name, scheme in components.security_schemes.items()
                },
            }
        )

    def resolve_component_schema(self, name: str, schema: Schema) -> Schema:
        """Resolve the component schema *name* with its own pointer in the working set."""
        pointer = f"{_COMPONENTS_PREFIX}schemas/{name}"
        self._expanding[pointer] = len(self._expanding)
        try:
            return self.resolve_schema(schema)
        finally:
            del self._expanding[pointer]

    # --- Paths ---

    def _resolve_path_item(self, item: PathItem) -> PathItem:
        update: dict = {
            "parameters": [self.resolve_parameter(p) for p in item.parameters],
        }
        for method, operation in item.operations():
            update[method] = self._resolve_operation(operation)
        return item.model_copy(update=update)

    def _resolve_operation(self, operation: Operation) -> Operation:
        update: dict = {
            "parameters": [self.resolve_parameter(p) for p in operation.parameters],
            "responses": {
                code: self.resolve_response(response)
                for code, response in operation.responses.items()
            },
        }
        if operation.request_body is not None:
            update["request_body"] = self.resolve_request_body(operation.request_body)
        return operation.model_copy(update=update)

    def resolve_parameter(self, param: Parameter) -> Parameter:
        if param.ref is not None:
            param = self._lookup(param.ref, "parameters")
        update: dict = {"ref": None}
        if param.schema_ is not None:
            update["schema_"] = self.resolve_schema(param.schema_)
        return param.model_copy(update=update)

    def resolve_request_body(self, body: RequestBody) -> RequestBody:
        if body.ref is not None:
            body = self._lookup(body.ref, "requestBodies")
        return body.model_copy(
            update={"ref": None, "content": self._resolve_content(body.content)}
        )

    def resolve_response(self, response: Response) -> Response:
        if response.ref is not None:
            response = self._lookup(response.ref, "responses")
        return response.model_copy(
            update={"ref": None, "content": self._resolve_content(response.content)}
        )

    def _resolve_content(self, content: dict[str, MediaType]) -> dict[str, MediaType]:
        resolved = {}
        for content_type, media in content.items():
            update: dict = {}
            if media.schema_ is not None:
                update["schema_"] = self.resolve_schema(media.schema_)
            if media.item_schema is not None:
                update["item_schema"] = self.resolve_schema(media.item_schema)
            resolved[content_type] = media.model_copy(update=update)
        return resolved

    # --- Schemas ---

    def resolve_schema(self, schema: Schema) -> Schema:
        """Expand *schema* and everything below it.

        A reference node is replaced by its expanded target, which keeps the
        original pointer in ``ref``. A pointer already being expanded is
        returned as an unexpanded reference node.

        An expansion whose cycles all close on its own pointer or below does
        not depend on where it is met, so it is computed once per resolver
        and shared by every later use site.
        """
        if schema.ref is None:
            return self._resolve_children(schema)

        pointer = schema.ref
        if pointer in self._expanding:
            logger.debug("Circular $ref %s left unexpanded", pointer)
            self._shallowest_cut = min(self._shallowest_cut, self._expanding[pointer])
            return schema.model_copy()

        if pointer in self._expanded:
            return self._expanded[pointer]

        target = self._lookup(pointer, "schemas")
        depth = len(self._expanding)
        outer_cut = self._shallowest_cut
        self._expanding[pointer] = depth
        self._shallowest_cut = depth
        try:
            expanded = self._resolve_children(target)
        finally:
            del self._expanding[pointer]
            inner_cut = self._shallowest_cut
            self._shallowest_cut = min(outer_cut, inner_cut)

        result = expanded.model_copy(update={"ref": pointer})
        if inner_cut >= depth:
            self._expanded[pointer] = result
        return result

    def _resolve_children(self, schema: Schema) -> Schema:
        update: dict = {
            "properties": {
                name: self.resolve_schema(prop)
                for name, prop in schema.properties.items()
            },
            "all_of": [self.resolve_schema(s) for s in schema.all_of],
            "one_of": [self.resolve_schema(s) for s in schema.one_of],
            "any_of": [self.resolve_schema(s) for s in schema.any_of],
        }
        if schema.items is not None:
            update["items"] = self.resolve_schema(schema.items)
        if isinstance(schema.additional_properties, Schema):
            update["additional_properties"] = self.resolve_schema(
                schema.additional_properties
            )
        return schema.model_copy(update=update)

    # --- Lookup ---

    def _lookup(self, ref: str, section: str) -> _Component:
        """Find the component *ref* points at, following component-to-component refs."""
        table = getattr(self._components, _SECTIONS[section])
        followed: list[str] = []
        current = ref
        while True:
            name = parse_ref_name(current, section)
            if name not in table:
                raise RefTargetNotFoundError(current)
            target = table[name]
            if target.ref is None:
                return target
            followed.append(current)
            if target.ref in followed:
                raise ResolveError(
                    f"Circular $ref chain: {' -> '.join(followed + [target.ref])}",
                    ref,
                )
            current = target.ref
