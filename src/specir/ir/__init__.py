"""Generator-agnostic intermediate representation."""

from specir.ir.operations import (
    HttpMethod,
    IrFieldEncoding,
    IrOperation,
    IrParameter,
    IrParameterLocation,
    IrRequestBody,
    IrResponse,
    IrReturnType,
    SseReturn,
    StandardReturn,
    VoidReturn,
)
from specir.ir.schemas import (
    IrAliasSchema,
    IrDiscriminator,
    IrEnumSchema,
    IrField,
    IrObjectSchema,
    IrSchema,
    IrUnionSchema,
)
from specir.ir.spec import IrInfo, IrModule, IrServer, IrSpec
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
    NormalizedName,
    NullType,
    NumberType,
    ObjectType,
    RefType,
    StringLiteralType,
    StringType,
    UnionType,
    VoidType,
)

__all__ = [
    "AnyType",
    "ArrayType",
    "BinaryType",
    "BooleanType",
    "DateTimeType",
    "HttpMethod",
    "InlineField",
    "IntegerType",
    "IntersectionType",
    "IrAliasSchema",
    "IrDiscriminator",
    "IrEnumSchema",
    "IrField",
    "IrFieldEncoding",
    "IrInfo",
    "IrModule",
    "IrObjectSchema",
    "IrOperation",
    "IrParameter",
    "IrParameterLocation",
    "IrRequestBody",
    "IrResponse",
    "IrReturnType",
    "IrSchema",
    "IrServer",
    "IrSpec",
    "IrType",
    "IrUnionSchema",
    "MapType",
    "NormalizedName",
    "NullType",
    "NumberType",
    "ObjectType",
    "RefType",
    "SseReturn",
    "StandardReturn",
    "StringLiteralType",
    "StringType",
    "UnionType",
    "VoidType",
]
