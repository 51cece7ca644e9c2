"""Named type declarations (:data:`IrSchema`).

Declarations live in :attr:`specir.ir.IrSpec.schemas` in declaration order.
They are created by the schema resolver and by the inline-type promoter; the
promoter is the only code that rewrites a field's type after creation.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from specir.ir.types import IrType, NormalizedName


class IrField(BaseModel):
    """One field of a named object declaration."""

    name: NormalizedName
    original_name: str
    field_type: IrType
    required: bool = False
    description: Optional[str] = None
    read_only: bool = False
    write_only: bool = False


# --- Declarations ---


class IrObjectSchema(BaseModel):
    kind: Literal["object"] = "object"
    name: NormalizedName
    description: Optional[str] = None
    fields: list[IrField] = Field(default_factory=list)
    additional_properties: Optional[IrType] = Field(
        default=None, description="Catch-all value type for undeclared keys"
    )


class IrEnumSchema(BaseModel):
    kind: Literal["enum"] = "enum"
    name: NormalizedName
    description: Optional[str] = None
    variants: list[str] = Field(default_factory=list)


class IrAliasSchema(BaseModel):
    kind: Literal["alias"] = "alias"
    name: NormalizedName
    description: Optional[str] = None
    target: IrType


class IrDiscriminator(BaseModel):
    """Tag property plus ``wire value -> variant name`` mapping."""

    property_name: str
    mapping: dict[str, str] = Field(default_factory=dict)


class IrUnionSchema(BaseModel):
    kind: Literal["union"] = "union"
    name: NormalizedName
    description: Optional[str] = None
    variants: list[IrType] = Field(default_factory=list)
    discriminator: Optional[IrDiscriminator] = None


IrSchema = Annotated[
    Union[IrObjectSchema, IrEnumSchema, IrAliasSchema, IrUnionSchema],
    Field(discriminator="kind"),
]
