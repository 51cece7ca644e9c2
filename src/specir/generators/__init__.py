"""Generator contract and registry.

Built-in generators are always available. Third-party packages register more
as entry points in the ``specir.generators`` group::

    [project.entry-points."specir.generators"]
    my-target = "my_package.generator:MyGenerator"

Entry points are loaded by calling the registered class with no arguments.
A built-in id cannot be overridden.
"""

from __future__ import annotations

import importlib.metadata
import logging

from specir.exceptions import GeneratorError
from specir.generators.base import CodeGenerator, GeneratedFile, write_files
from specir.generators.ir_json import IrJsonGenerator

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "specir.generators"
"""The entry-point group name used for generator discovery."""

_BUILTINS: dict[str, type[CodeGenerator]] = {
    "ir-json": IrJsonGenerator,
}


def _entry_points() -> dict[str, importlib.metadata.EntryPoint]:
    return {
        ep.name: ep
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP)
        if ep.name not in _BUILTINS
    }


def available_generators() -> list[str]:
    """Ids of built-in and installed generators, sorted."""
    return sorted(set(_BUILTINS) | set(_entry_points()))


def get_generator(generator_id: str) -> CodeGenerator:
    """Instantiate the generator registered as *generator_id*.

    Raises:
        GeneratorError: If no generator has this id or it fails to load.
    """
    if generator_id in _BUILTINS:
        return _BUILTINS[generator_id]()

    ep = _entry_points().get(generator_id)
    if ep is None:
        available = ", ".join(available_generators())
        raise GeneratorError(
            f"Unknown generator {generator_id!r}. Available: {available}"
        )

    try:
        generator = ep.load()()
    except Exception as exc:
        logger.warning("Failed to load generator '%s': %s", generator_id, exc)
        raise GeneratorError(f"Failed to load generator {generator_id!r}: {exc}") from exc

    if not isinstance(generator, CodeGenerator):
        raise GeneratorError(
            f"Generator {generator_id!r} does not implement CodeGenerator"
        )
    return generator


__all__ = [
    "CodeGenerator",
    "ENTRY_POINT_GROUP",
    "GeneratedFile",
    "IrJsonGenerator",
    "available_generators",
    "get_generator",
    "write_files",
]
