"""Root of the intermediate representation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from specir.ir.operations import IrOperation
from specir.ir.schemas import IrSchema
from specir.ir.types import NormalizedName


class IrInfo(BaseModel):
    title: str
    description: Optional[str] = None
    version: str


class IrServer(BaseModel):
    url: str
    description: Optional[str] = None


class IrModule(BaseModel):
    """Operations sharing a tag, as indices into :attr:`IrSpec.operations`."""

    name: NormalizedName
    operations: list[int] = Field(default_factory=list)


class IrSpec(BaseModel):
    """Fully resolved API description handed to generators.

    Built once per :func:`~specir.transform.transform` call. ``RefType``
    names inside it are keys of :meth:`schema_lookup`.
    """

    info: IrInfo
    servers: list[IrServer] = Field(default_factory=list)
    schemas: list[IrSchema] = Field(default_factory=list)
    operations: list[IrOperation] = Field(default_factory=list)
    modules: list[IrModule] = Field(default_factory=list)

    def schema_lookup(self) -> dict[str, IrSchema]:
        """Map PascalCase declaration names to declarations."""
        return {schema.name.pascal_case: schema for schema in self.schemas}

    def operations_for(self, module: IrModule) -> list[IrOperation]:
        return [self.operations[i] for i in module.operations]
