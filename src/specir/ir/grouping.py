"""Operation grouping strategies used when splitting generated output."""

from __future__ import annotations

from pydantic import BaseModel, Field

from specir.ir.spec import IrSpec
from specir.ir.types import NormalizedName
from specir.models import SplitBy
from specir.transform.name_normalizer import normalize_name


class OperationGroup(BaseModel):
    name: NormalizedName
    operation_indices: list[int] = Field(default_factory=list)


def group_operations(ir: IrSpec, split_by: SplitBy) -> list[OperationGroup]:
    """Group the operations of *ir* according to *split_by*.

    ``TAG`` reuses the modules built during transformation. ``OPERATION``
    yields one group per operation. ``ROUTE`` groups by the first
    non-parameter path segment in first-seen order.
    """
    if split_by == SplitBy.TAG:
        return [
            OperationGroup(name=module.name, operation_indices=list(module.operations))
            for module in ir.modules
        ]

    if split_by == SplitBy.OPERATION:
        return [
            OperationGroup(name=op.name, operation_indices=[i])
            for i, op in enumerate(ir.operations)
        ]

    groups: dict[str, list[int]] = {}
    for i, op in enumerate(ir.operations):
        groups.setdefault(_route_group(op.path), []).append(i)
    return [
        OperationGroup(name=normalize_name(key), operation_indices=indices)
        for key, indices in groups.items()
    ]


def _route_group(path: str) -> str:
    for segment in path.split("/"):
        if segment and not segment.startswith("{"):
            return segment
    return "default"
