"""Hoist anonymous inline object types into named declarations.

Runs after every schema and operation of an :class:`~specir.ir.IrSpec` exists.
Each non-empty :class:`~specir.ir.ObjectType` found below a declaration or an
operation is replaced by a :class:`~specir.ir.RefType` to a new
:class:`~specir.ir.IrObjectSchema` appended to ``IrSpec.schemas``.

Names come from where the object was found:

==========================  =================================
Location                    Context name
==========================  =================================
field ``owner`` of ``Pet``  ``PetOwner``
array items                 ``<Context>Item``
map values                  ``<Context>Value``
union variant *n*           ``<Context>Variant<n>``
intersection part *n*       ``<Context>Part<n>``
operation response          ``<Operation>Response``
operation request body      ``<Operation>Body``
operation parameter         ``<Operation><Parameter>``
SSE event / variant *n*     ``<Operation>Event`` / ``<Operation>EventVariant<n>``
==========================  =================================

A name that is already taken gets the first free numeric suffix (``2``,
``3``, ...). Empty objects are left in place as opaque-object markers.
Running the pass on an already-promoted spec changes nothing.
"""

from __future__ import annotations

import logging

from specir.ir.operations import SseReturn, StandardReturn
from specir.ir.schemas import (
    IrAliasSchema,
    IrField,
    IrObjectSchema,
    IrSchema,
    IrUnionSchema,
)
from specir.ir.spec import IrSpec
from specir.ir.types import (
    ArrayType,
    IntersectionType,
    IrType,
    MapType,
    ObjectType,
    RefType,
    UnionType,
)
from specir.transform.name_normalizer import normalize_name, to_pascal_case

logger = logging.getLogger(__name__)


def promote_inline_objects(ir: IrSpec) -> None:
    """Promote inline objects of *ir* in place."""
    promoter = _Promoter({schema.name.pascal_case for schema in ir.schemas})

    for schema in list(ir.schemas):
        promoter.promote_schema(schema)

    for op in ir.operations:
        op_name = op.name.pascal_case
        ret = op.return_type
        if isinstance(ret, StandardReturn):
            ret.response.response_type = promoter.promote(
                f"{op_name}Response", ret.response.response_type
            )
        elif isinstance(ret, SseReturn):
            if ret.variants:
                ret.variants = [
                    promoter.promote(f"{op_name}EventVariant{i}", variant)
                    for i, variant in enumerate(ret.variants, 1)
                ]
                ret.event_type = UnionType(variants=tuple(ret.variants))
            else:
                ret.event_type = promoter.promote(f"{op_name}Event", ret.event_type)
            if ret.json_response is not None:
                ret.json_response.response_type = promoter.promote(
                    f"{op_name}Response", ret.json_response.response_type
                )

        if op.request_body is not None:
            op.request_body.body_type = promoter.promote(
                f"{op_name}Body", op.request_body.body_type
            )

        for param in op.parameters:
            param.param_type = promoter.promote(
                f"{op_name}{param.name.pascal_case}", param.param_type
            )

    ir.schemas.extend(promoter.new_schemas)


class _Promoter:
    def __init__(self, used_names: set[str]):
        self.used_names = used_names
        self.new_schemas: list[IrSchema] = []

    def promote_schema(self, schema: IrSchema) -> None:
        name = schema.name.pascal_case
        if isinstance(schema, IrObjectSchema):
            for field in schema.fields:
                field.field_type = self.promote(
                    f"{name}{field.name.pascal_case}", field.field_type
                )
            if schema.additional_properties is not None:
                schema.additional_properties = self.promote(
                    f"{name}Value", schema.additional_properties
                )
        elif isinstance(schema, IrUnionSchema):
            schema.variants = [
                self.promote(f"{name}Variant{i}", variant)
                for i, variant in enumerate(schema.variants, 1)
            ]
        elif isinstance(schema, IrAliasSchema):
            schema.target = self.promote(name, schema.target)

    def promote(self, context: str, ir_type: IrType) -> IrType:
        """Return *ir_type* with every non-empty inline object replaced by a ``Ref``."""
        if isinstance(ir_type, ObjectType):
            if not ir_type.fields:
                return ir_type
            return self._declare(context, ir_type)
        if isinstance(ir_type, ArrayType):
            return ArrayType(item=self.promote(f"{context}Item", ir_type.item))
        if isinstance(ir_type, MapType):
            return MapType(value=self.promote(f"{context}Value", ir_type.value))
        if isinstance(ir_type, UnionType):
            return UnionType(
                variants=tuple(
                    self.promote(f"{context}Variant{i}", variant)
                    for i, variant in enumerate(ir_type.variants, 1)
                )
            )
        if isinstance(ir_type, IntersectionType):
            return IntersectionType(
                parts=tuple(
                    self.promote(f"{context}Part{i}", part)
                    for i, part in enumerate(ir_type.parts, 1)
                )
            )
        return ir_type

    def _declare(self, context: str, obj: ObjectType) -> RefType:
        name = normalize_name(self.unique_name(context))
        schema = IrObjectSchema(name=name)
        # Declared before its fields are walked, so parents precede children.
        self.new_schemas.append(schema)
        logger.debug("Promoted inline object to schema %s", name.pascal_case)

        fields = []
        for inline in obj.fields:
            field_name = normalize_name(inline.name)
            fields.append(
                IrField(
                    name=field_name,
                    original_name=inline.name,
                    field_type=self.promote(
                        f"{name.pascal_case}{field_name.pascal_case}", inline.type
                    ),
                    required=inline.required,
                )
            )
        schema.fields = fields
        return RefType(name=name.pascal_case)

    def unique_name(self, context: str) -> str:
        base = to_pascal_case(context)
        candidate = base
        suffix = 2
        while candidate in self.used_names:
            candidate = f"{base}{suffix}"
            suffix += 1
        self.used_names.add(candidate)
        return candidate
