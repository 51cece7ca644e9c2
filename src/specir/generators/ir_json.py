"""Built-in generator that renders the IR itself as JSON.

Produces ``ir.json`` with the whole :class:`~specir.ir.IrSpec` and, unless
disabled, one ``modules/<group>.json`` per operation group. Groups whose file
names collide get a numeric suffix (``pet.json``, ``pet_2.json``). External
emitters written in other languages can consume these files directly.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, Field, ValidationError

from specir.exceptions import GeneratorError
from specir.generators.base import CodeGenerator, GeneratedFile
from specir.ir.grouping import group_operations
from specir.ir.spec import IrSpec
from specir.models import GeneratorConfig


class IrJsonOptions(BaseModel):
    """Generator-specific keys of a ``generators.ir-json`` section."""

    indent: int = Field(default=2, ge=0)
    include_modules: bool = Field(
        default=True, description="Also write one file per operation group"
    )


class IrJsonGenerator(CodeGenerator):
    @property
    def id(self) -> str:
        return "ir-json"

    @property
    def description(self) -> str:
        return "Intermediate representation as JSON"

    def generate(self, ir: IrSpec, config: GeneratorConfig) -> list[GeneratedFile]:
        try:
            options = IrJsonOptions.model_validate(config.model_extra or {})
        except ValidationError as exc:
            raise GeneratorError(f"Invalid options for generator {self.id!r}: {exc}") from exc

        data = ir.model_dump(mode="json")
        if config.base_url:
            data["servers"] = [{"url": config.base_url, "description": None}] + data["servers"]

        files = [GeneratedFile(path="ir.json", content=_dumps(data, options.indent))]
        if not options.include_modules:
            return files

        stems: set[str] = set()
        for group in group_operations(ir, config.split_by):
            payload = {
                "name": group.name.model_dump(mode="json"),
                "operations": [
                    ir.operations[i].model_dump(mode="json") for i in group.operation_indices
                ],
            }
            files.append(
                GeneratedFile(
                    path=f"modules/{_unique_stem(group.name.snake_case, stems)}.json",
                    content=_dumps(payload, options.indent),
                )
            )
        return files


def _dumps(data: object, indent: int) -> str:
    return json.dumps(data, indent=indent or None, ensure_ascii=False) + "\n"


def _unique_stem(base: str, taken: set[str]) -> str:
    # Groups may share a snake_case name: duplicate operation names, or tags
    # differing only in case.
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}_{suffix}"
        suffix += 1
    taken.add(candidate)
    return candidate
