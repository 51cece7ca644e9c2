"""Structural IR types and pre-computed names.

:data:`IrType` is a closed sum type: every variant is a frozen Pydantic model
tagged by a ``kind`` literal, so values compare structurally and can be
serialised to JSON without custom encoders. Consumers dispatch with
``isinstance`` and must handle every variant.

:class:`RefType` is a *weak* reference: it holds the PascalCase name of a
declaration in :attr:`~specir.ir.IrSpec.schemas`, never the declaration
itself. This is what keeps recursive schemas (trees, linked lists) finite.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class NormalizedName(BaseModel):
    """A name with every casing variant pre-computed.

    Built once by :func:`~specir.transform.name_normalizer.normalize_name`
    and never modified afterwards. Equality and hashing use
    :attr:`original` only.
    """

    model_config = ConfigDict(frozen=True)

    original: str
    pascal_case: str
    camel_case: str
    snake_case: str
    screaming_snake: str

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NormalizedName):
            return self.original == other.original
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.original)

    def __str__(self) -> str:
        return self.original


class _IrTypeBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class StringType(_IrTypeBase):
    kind: Literal["string"] = "string"


class StringLiteralType(_IrTypeBase):
    kind: Literal["string_literal"] = "string_literal"
    value: str


class NumberType(_IrTypeBase):
    kind: Literal["number"] = "number"


class IntegerType(_IrTypeBase):
    kind: Literal["integer"] = "integer"


class BooleanType(_IrTypeBase):
    kind: Literal["boolean"] = "boolean"


class NullType(_IrTypeBase):
    kind: Literal["null"] = "null"


class AnyType(_IrTypeBase):
    kind: Literal["any"] = "any"


class VoidType(_IrTypeBase):
    kind: Literal["void"] = "void"


class DateTimeType(_IrTypeBase):
    kind: Literal["date_time"] = "date_time"


class BinaryType(_IrTypeBase):
    kind: Literal["binary"] = "binary"


class ArrayType(_IrTypeBase):
    kind: Literal["array"] = "array"
    item: IrType


class MapType(_IrTypeBase):
    """String-keyed map (``additionalProperties``)."""

    kind: Literal["map"] = "map"
    value: IrType


class InlineField(_IrTypeBase):
    """One field of an anonymous :class:`ObjectType`."""

    name: str
    type: IrType
    required: bool = False


class ObjectType(_IrTypeBase):
    """Anonymous object shape.

    An empty field tuple means "opaque object" and is never promoted to a
    named declaration.
    """

    kind: Literal["object"] = "object"
    fields: tuple[InlineField, ...] = ()


class RefType(_IrTypeBase):
    """By-name reference to a declaration in ``IrSpec.schemas``."""

    kind: Literal["ref"] = "ref"
    name: str


class UnionType(_IrTypeBase):
    kind: Literal["union"] = "union"
    variants: tuple[IrType, ...]


class IntersectionType(_IrTypeBase):
    """All parts apply at once (``allOf`` with at least one reference)."""

    kind: Literal["intersection"] = "intersection"
    parts: tuple[IrType, ...]


IrType = Annotated[
    Union[
        StringType,
        StringLiteralType,
        NumberType,
        IntegerType,
        BooleanType,
        NullType,
        AnyType,
        VoidType,
        DateTimeType,
        BinaryType,
        ArrayType,
        MapType,
        ObjectType,
        RefType,
        UnionType,
        IntersectionType,
    ],
    Field(discriminator="kind"),
]

for _model in (ArrayType, MapType, InlineField, ObjectType, UnionType, IntersectionType):
    _model.model_rebuild()
