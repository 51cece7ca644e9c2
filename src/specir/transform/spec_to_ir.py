"""Compile a parsed OpenAPI document into an :class:`~specir.ir.IrSpec`.

The single public entry point is :func:`transform`. It runs six phases in
order, and any failure aborts the whole call; a partial IR is never returned.

1. Resolve every ``$ref`` (:mod:`specir.parser.resolver`).
2. Convert component schemas to declarations, in declaration order.
3. Convert every operation of every path item. Path-level parameters come
   before operation-level ones.
4. Group operations into modules by tag.
5. Copy info and servers.
6. Promote inline objects (:mod:`specir.transform.promote_inline`).
"""

from __future__ import annotations

import logging
from typing import Optional

from specir.ir.operations import (
    HttpMethod,
    IrFieldEncoding,
    IrOperation,
    IrParameter,
    IrParameterLocation,
    IrRequestBody,
)
from specir.ir.schemas import IrSchema
from specir.ir.spec import IrInfo, IrModule, IrServer, IrSpec
from specir.ir.types import AnyType
from specir.models import NamingStrategy, TransformOptions
from specir.parser.document import OpenApiSpec, Operation, Parameter, RequestBody
from specir.parser.resolver import resolve_refs
from specir.transform.name_normalizer import normalize_name, route_to_name
from specir.transform.promote_inline import promote_inline_objects
from specir.transform.schema_resolver import schema_to_schema, schema_to_type
from specir.transform.sse_detector import JSON, detect_return_type, find_content_type

logger = logging.getLogger(__name__)

DEFAULT_MODULE = "default"


def transform(spec: OpenApiSpec, options: TransformOptions | None = None) -> IrSpec:
    """Transform a parsed document into the fully resolved IR.

    Args:
        spec: The parsed document. It is not modified.
        options: Naming strategy and aliases. Defaults to ``operationId``
            naming with no aliases.

    Returns:
        A new :class:`IrSpec`.

    Raises:
        ResolveError: If a ``$ref`` is malformed or its target is missing.
        TransformError: If a component schema cannot be declared.
    """
    options = options or TransformOptions()

    resolved = resolve_refs(spec)
    logger.debug("Resolved $ref pointers in %d paths", len(resolved.paths))

    schemas = _resolve_schemas(resolved)
    logger.debug("Resolved %d component schemas", len(schemas))

    operations = _resolve_operations(resolved, options)
    logger.debug("Resolved %d operations", len(operations))

    modules = group_into_modules(operations)
    logger.debug("Grouped operations into %d modules", len(modules))

    ir = IrSpec(
        info=IrInfo(
            title=resolved.info.title,
            description=resolved.info.description,
            version=resolved.info.version,
        ),
        servers=[
            IrServer(url=server.url, description=server.description)
            for server in resolved.servers
        ],
        schemas=schemas,
        operations=operations,
        modules=modules,
    )

    before = len(ir.schemas)
    promote_inline_objects(ir)
    logger.debug("Promoted %d inline objects", len(ir.schemas) - before)
    return ir


def _resolve_schemas(spec: OpenApiSpec) -> list[IrSchema]:
    if spec.components is None:
        return []
    return [
        schema_to_schema(name, schema)
        for name, schema in spec.components.schemas.items()
    ]


def _resolve_operations(
    spec: OpenApiSpec, options: TransformOptions
) -> list[IrOperation]:
    operations = []
    for path, item in spec.paths.items():
        path_params = _resolve_parameters(item.parameters, path)
        for method, op in item.operations():
            operations.append(
                _build_operation(HttpMethod(method.upper()), path, op, path_params, options)
            )
    return operations


def operation_raw_name(
    method: HttpMethod, path: str, op: Operation, options: TransformOptions
) -> str:
    """Name of *op* before aliases: its ``operationId`` or the route-derived name."""
    if options.naming_strategy == NamingStrategy.USE_OPERATION_ID and op.operation_id:
        return op.operation_id
    return route_to_name(method.value, path)


def _build_operation(
    method: HttpMethod,
    path: str,
    op: Operation,
    path_params: list[IrParameter],
    options: TransformOptions,
) -> IrOperation:
    raw_name = operation_raw_name(method, path, op, options)
    name = options.aliases.get(raw_name, raw_name)

    return IrOperation(
        name=normalize_name(name),
        method=method,
        path=path,
        summary=op.summary,
        description=op.description,
        tags=list(op.tags),
        parameters=path_params + _resolve_parameters(op.parameters, path),
        request_body=_resolve_request_body(op.request_body),
        return_type=detect_return_type(name, op.responses),
        deprecated=op.deprecated,
    )


def _resolve_parameters(params: list[Parameter], path: str) -> list[IrParameter]:
    result = []
    for param in params:
        try:
            location = IrParameterLocation(param.in_)
        except ValueError:
            logger.warning(
                "Skipping parameter %r with unknown location %r on %s",
                param.name,
                param.in_,
                path,
            )
            continue
        if not param.name:
            logger.warning("Skipping unnamed %s parameter on %s", location.value, path)
            continue

        result.append(
            IrParameter(
                name=normalize_name(param.name),
                original_name=param.name,
                location=location,
                param_type=(
                    schema_to_type(param.schema_) if param.schema_ is not None else AnyType()
                ),
                # Path parameters are always required.
                required=param.required or location == IrParameterLocation.PATH,
                description=param.description,
            )
        )
    return result


def _resolve_request_body(body: Optional[RequestBody]) -> Optional[IrRequestBody]:
    if body is None or not body.content:
        return None

    content_type = find_content_type(body.content, JSON) or next(iter(body.content))
    media = body.content[content_type]

    encoding = None
    if media.encoding:
        encoding = [
            IrFieldEncoding(field_name=field, content_type=enc.content_type)
            for field, enc in media.encoding.items()
        ]

    return IrRequestBody(
        body_type=schema_to_type(media.schema_) if media.schema_ is not None else AnyType(),
        required=body.required,
        content_type=content_type,
        description=body.description,
        encoding=encoding,
    )


def group_into_modules(operations: list[IrOperation]) -> list[IrModule]:
    """Group operation indices by tag; untagged operations go to ``default``.

    An operation with several tags appears in each of their modules. Modules
    are sorted by tag name.
    """
    groups: dict[str, list[int]] = {}
    for i, op in enumerate(operations):
        for tag in op.tags or [DEFAULT_MODULE]:
            groups.setdefault(tag, []).append(i)

    return [
        IrModule(name=normalize_name(tag), operations=indices)
        for tag, indices in sorted(groups.items())
    ]
