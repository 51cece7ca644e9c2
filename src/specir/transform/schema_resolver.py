"""Convert resolved schema nodes into IR types and named declarations.

Two entry points:

* :func:`schema_to_type` -- structural, unnamed conversion to an
  :data:`~specir.ir.IrType`.
* :func:`schema_to_schema` -- conversion of a named component schema to an
  :data:`~specir.ir.IrSchema` declaration.

Both read schemas produced by :mod:`specir.parser.resolver`: a node that still
carries a ``$ref`` pointer (an expanded reference or an unexpanded cycle)
always becomes a by-name :class:`~specir.ir.RefType`.

**Precedence** (first match wins):

1. ``$ref`` -> ``Ref``.
2. ``oneOf`` / ``anyOf`` -> ``Union``. Only ``oneOf`` unions carry a
   discriminator at the named level.
3. ``allOf`` -> ``Intersection`` (``Alias`` when named) as soon as a member is
   a reference, otherwise one flattened ``Object`` where later fields replace
   earlier ones and the schema's own properties come last.
4. ``enum`` of strings -> ``StringLiteral`` / ``Union`` of literals (``Enum``
   when named).
5. ``const`` -> ``StringLiteral`` for strings, else ``String``.
6. ``type`` -> primitives, ``Array``, the object rule; a list of types or
   ``nullable: true`` adds ``Null`` to a ``Union``.
7. No ``type``: ``properties`` -> object, ``items`` -> array, else ``Any``.

Anything that cannot be classified degrades to ``Any``.
"""

from __future__ import annotations

from typing import Optional

from specir.exceptions import TransformError
from specir.ir.schemas import (
    IrAliasSchema,
    IrDiscriminator,
    IrEnumSchema,
    IrField,
    IrObjectSchema,
    IrSchema,
    IrUnionSchema,
)
from specir.ir.types import (
    AnyType,
    ArrayType,
    BinaryType,
    BooleanType,
    DateTimeType,
    InlineField,
    IntegerType,
    IntersectionType,
    IrType,
    MapType,
    NullType,
    NumberType,
    ObjectType,
    RefType,
    StringLiteralType,
    StringType,
    UnionType,
)
from specir.parser.document import Schema
from specir.parser.resolver import ref_target_name
from specir.transform.name_normalizer import normalize_name, to_pascal_case

_DATE_FORMATS = frozenset({"date", "date-time"})
_BINARY_FORMATS = frozenset({"binary", "byte"})


# ---------------------------------------------------------------------------
# Structural types
# ---------------------------------------------------------------------------


def schema_to_type(schema: Schema) -> IrType:
    """Convert *schema* to an unnamed :data:`IrType`. Never fails."""
    if schema.ref is not None:
        return ref_type(schema.ref)

    members = schema.one_of or schema.any_of
    if members:
        return UnionType(variants=tuple(schema_to_type(m) for m in members))

    if schema.all_of:
        composed = _all_of_type(schema)
        if composed is not None:
            return composed

    if schema.enum:
        literal = _enum_type(schema.enum)
        if literal is not None:
            return literal

    if schema.has_const:
        if isinstance(schema.const, str):
            return StringLiteralType(value=schema.const)
        return StringType()

    if schema.type_ is not None:
        return _typed(schema)

    if schema.properties:
        return _object_type(schema)
    if schema.items is not None:
        return ArrayType(item=schema_to_type(schema.items))
    return AnyType()


def ref_type(pointer: str) -> RefType:
    """``Ref`` to the declaration named by the last segment of *pointer*."""
    return RefType(name=to_pascal_case(ref_target_name(pointer) or "Unknown"))


def _typed(schema: Schema) -> IrType:
    types = [schema.type_] if isinstance(schema.type_, str) else list(schema.type_)
    non_null = [t for t in types if t != "null"]
    nullable = schema.nullable or len(non_null) < len(types)

    if not non_null:
        return NullType() if types else AnyType()

    bases = [_primitive(schema, t) for t in non_null]
    if len(bases) == 1 and not nullable:
        return bases[0]

    variants: list[IrType] = []
    for base in bases:
        if isinstance(base, UnionType):
            variants.extend(base.variants)
        else:
            variants.append(base)
    if nullable:
        variants.append(NullType())
    return UnionType(variants=tuple(variants))


def _primitive(schema: Schema, type_name: str) -> IrType:
    if type_name == "string":
        if schema.format in _DATE_FORMATS:
            return DateTimeType()
        if schema.format in _BINARY_FORMATS:
            return BinaryType()
        return StringType()
    if type_name == "number":
        return NumberType()
    if type_name == "integer":
        return IntegerType()
    if type_name == "boolean":
        return BooleanType()
    if type_name == "array":
        if schema.items is None:
            return ArrayType(item=AnyType())
        return ArrayType(item=schema_to_type(schema.items))
    if type_name == "object":
        return _object_type(schema)
    return AnyType()


def _object_type(schema: Schema) -> IrType:
    """Object rule: fields when there are properties, else a map or ``Any``."""
    if schema.properties:
        return ObjectType(
            fields=tuple(
                InlineField(
                    name=name,
                    type=schema_to_type(prop),
                    required=name in schema.required,
                )
                for name, prop in schema.properties.items()
            )
        )

    extra = schema.additional_properties
    if isinstance(extra, Schema):
        return MapType(value=schema_to_type(extra))
    if extra is True:
        return MapType(value=AnyType())
    return AnyType()


def _enum_type(values: list) -> Optional[IrType]:
    """Literal type for a string enum; ``None`` when the enum is not all strings."""
    if not all(value is None or isinstance(value, str) for value in values):
        return None

    strings = _distinct_strings(values)
    if not strings:
        return None

    variants: list[IrType] = [StringLiteralType(value=value) for value in strings]
    if None in values:
        variants.append(NullType())
    if len(variants) == 1:
        return variants[0]
    return UnionType(variants=tuple(variants))


def _distinct_strings(values: list) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        if isinstance(value, str):
            seen.setdefault(value, None)
    return list(seen)


# --- allOf ---


def _has_ref(schema: Schema) -> bool:
    return schema.ref is not None or any(_has_ref(m) for m in schema.all_of)


def _all_of_type(schema: Schema) -> Optional[IrType]:
    if any(_has_ref(member) for member in schema.all_of):
        if len(schema.all_of) == 1 and not schema.properties:
            # "allOf: [$ref]" is how 3.0 attaches nullable to a reference.
            inner = schema_to_type(schema.all_of[0])
            if schema.nullable:
                return UnionType(variants=(inner, NullType()))
            return inner
        parts = [schema_to_type(member) for member in schema.all_of]
        if schema.properties:
            parts.append(_object_type(schema))
        return IntersectionType(parts=tuple(parts))

    fields = flatten_all_of(schema)
    if fields:
        return ObjectType(
            fields=tuple(
                InlineField(name=name, type=schema_to_type(prop), required=required)
                for name, (prop, required) in fields.items()
            )
        )
    if len(schema.all_of) == 1:
        return schema_to_type(schema.all_of[0])
    return None


def flatten_all_of(schema: Schema) -> dict[str, tuple[Schema, bool]]:
    """Merge the properties of *schema* and its inline ``allOf`` members.

    Returns ``{name: (property schema, required)}`` in merge order. A later
    definition of a name replaces the earlier one and moves to the end. A
    field is required if its own schema or *schema* lists it.
    """
    fields: dict[str, tuple[Schema, bool]] = {}
    for member in schema.all_of:
        for name, (prop, required) in flatten_all_of(member).items():
            fields.pop(name, None)
            fields[name] = (prop, required or name in schema.required)
    for name, prop in schema.properties.items():
        fields.pop(name, None)
        fields[name] = (prop, name in schema.required)
    return fields


# ---------------------------------------------------------------------------
# Named declarations
# ---------------------------------------------------------------------------


def schema_to_schema(name: str, schema: Schema) -> IrSchema:
    """Convert the component schema *name* to a declaration.

    Raises:
        TransformError: If *schema* is a reference whose pointer does not
            name a declaration.
    """
    normalized = normalize_name(name)
    description = schema.description

    if schema.ref is not None:
        target = ref_target_name(schema.ref)
        if not target:
            raise TransformError(
                f"Cannot derive a schema name from $ref {schema.ref!r} (in schema {name!r})"
            )
        return IrAliasSchema(
            name=normalized, target=RefType(name=to_pascal_case(target))
        )

    members = schema.one_of or schema.any_of
    if members:
        return IrUnionSchema(
            name=normalized,
            description=description,
            variants=[schema_to_type(m) for m in members],
            discriminator=_discriminator(schema),
        )

    if schema.all_of:
        if any(_has_ref(member) for member in schema.all_of):
            return IrAliasSchema(
                name=normalized, description=description, target=_all_of_type(schema)
            )
        fields = flatten_all_of(schema)
        if fields:
            return IrObjectSchema(
                name=normalized,
                description=description,
                fields=[
                    _build_field(field_name, prop, required)
                    for field_name, (prop, required) in fields.items()
                ],
                additional_properties=_additional_properties(schema),
            )
        if len(schema.all_of) == 1:
            return IrAliasSchema(
                name=normalized,
                description=description,
                target=schema_to_type(schema.all_of[0]),
            )

    if schema.enum:
        variants = _distinct_strings(schema.enum)
        if len(variants) > 1:
            return IrEnumSchema(name=normalized, description=description, variants=variants)
        if len(variants) == 1:
            return IrAliasSchema(
                name=normalized,
                description=description,
                target=StringLiteralType(value=variants[0]),
            )

    if schema.properties and _is_object(schema):
        return IrObjectSchema(
            name=normalized,
            description=description,
            fields=[
                _build_field(field_name, prop, field_name in schema.required)
                for field_name, prop in schema.properties.items()
            ],
            additional_properties=_additional_properties(schema),
        )

    return IrAliasSchema(
        name=normalized, description=description, target=schema_to_type(schema)
    )


def _is_object(schema: Schema) -> bool:
    if schema.type_ is None:
        return True
    types = [schema.type_] if isinstance(schema.type_, str) else schema.type_
    return [t for t in types if t != "null"] == ["object"]


def _build_field(name: str, prop: Schema, required: bool) -> IrField:
    # A referenced property's description and access flags belong to its target.
    is_ref = prop.ref is not None
    return IrField(
        name=normalize_name(name),
        original_name=name,
        field_type=schema_to_type(prop),
        required=required,
        description=None if is_ref else prop.description,
        read_only=False if is_ref else prop.read_only,
        write_only=False if is_ref else prop.write_only,
    )


def _additional_properties(schema: Schema) -> Optional[IrType]:
    extra = schema.additional_properties
    if isinstance(extra, Schema):
        return schema_to_type(extra)
    if extra is True:
        return AnyType()
    return None


def _discriminator(schema: Schema) -> Optional[IrDiscriminator]:
    """Discriminator of a ``oneOf`` union; ``anyOf`` unions never get one."""
    source = schema.discriminator
    if source is None or not schema.one_of:
        return None

    if source.mapping:
        mapping = {
            value: to_pascal_case(ref_target_name(target) or target)
            for value, target in source.mapping.items()
        }
    else:
        mapping = {}
        for variant in schema.one_of:
            if variant.ref is None:
                continue
            raw_name = ref_target_name(variant.ref)
            tag = _tag_value(variant, source.property_name) or raw_name
            mapping[tag] = to_pascal_case(raw_name)

    return IrDiscriminator(property_name=source.property_name, mapping=mapping)


def _tag_value(variant: Schema, property_name: str) -> Optional[str]:
    """The fixed value a variant declares for its discriminator property, if any."""
    entry = flatten_all_of(variant).get(property_name)
    if entry is None:
        return None
    prop = entry[0]
    if prop.has_const and isinstance(prop.const, str):
        return prop.const
    if prop.enum and len(prop.enum) == 1 and isinstance(prop.enum[0], str):
        return prop.enum[0]
    return None
