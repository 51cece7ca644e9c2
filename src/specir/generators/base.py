"""Abstract base class for code generators.

A generator turns a finished :class:`~specir.ir.IrSpec` into a list of
:class:`GeneratedFile` objects. It never writes to disk itself: the caller
passes the result to :func:`write_files`, which keeps every file inside the
configured output directory.

Generators are registered as entry points in the ``specir.generators`` group
and looked up by :func:`~specir.generators.get_generator`.

Example:
    Minimal generator::

        class SchemaNames(CodeGenerator):
            @property
            def id(self) -> str:
                return "schema-names"

            def generate(self, ir, config):
                names = "\\n".join(s.name.pascal_case for s in ir.schemas)
                return [GeneratedFile(path="schemas.txt", content=names)]
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

from pydantic import BaseModel

from specir.config import atomic_write
from specir.exceptions import GeneratorError
from specir.ir.spec import IrSpec
from specir.models import GeneratorConfig

logger = logging.getLogger(__name__)


class GeneratedFile(BaseModel):
    """One output file, with *path* relative to the output directory."""

    path: str
    content: str


class CodeGenerator(ABC):
    """Base class for all generators."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Return the identifier used under ``generators`` in the config file."""
        ...

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def generate(self, ir: IrSpec, config: GeneratorConfig) -> list[GeneratedFile]:
        """Render *ir* into files.

        Raises:
            GeneratorError: If *config* is invalid for this generator or
                rendering fails.
        """
        ...


def write_files(files: list[GeneratedFile], output_dir: Path) -> list[Path]:
    """Write *files* below *output_dir* and return the written paths.

    Raises:
        GeneratorError: If a file path is absolute or escapes *output_dir*,
            or if writing fails.
    """
    root = output_dir.resolve()
    written = []
    for file in files:
        relative = PurePosixPath(file.path)
        if relative.is_absolute() or ".." in relative.parts:
            raise GeneratorError(f"Refusing to write outside {output_dir}: {file.path}")

        target = root.joinpath(*relative.parts)
        try:
            atomic_write(target, file.content)
        except OSError as exc:
            raise GeneratorError(f"Failed to write {target}: {exc}") from exc
        logger.debug("Wrote %s", target)
        written.append(target)
    return written
