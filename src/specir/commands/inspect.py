"""Inspect command -- show the IR compiled from a document.

Implements ``specir inspect``. By default a summary is printed: API info,
servers, every declaration with its kind, every operation with its method,
path, return kind and tags, and the module names. ``--full`` dumps the whole
IR instead. Naming options are taken from ``.specir.yaml`` when present.
"""

from __future__ import annotations

from typing import Any

import typer

from specir.exceptions import SpecirError
from specir.ir import IrSpec
from specir.output import DataFormat, error, print_structured


def inspect_command(
    input: str = typer.Argument(
        ..., help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    format: DataFormat = typer.Option(
        DataFormat.YAML, "--format", "-f", help="Output format."
    ),
    full: bool = typer.Option(
        False, "--full", help="Dump the complete IR instead of a summary."
    ),
) -> None:
    """Print the intermediate representation of an OpenAPI document.

    Example::

        specir inspect openapi.yaml
        specir inspect openapi.yaml --format json --full
    """
    from specir.config import load_config
    from specir.models import TransformOptions
    from specir.parser import load_document
    from specir.transform import transform

    try:
        config = load_config()
        options = config.transform_options() if config else TransformOptions()
        ir = transform(load_document(input), options)
    except SpecirError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    data = ir.model_dump(mode="json") if full else summarize(ir)
    print_structured(data, format)


def summarize(ir: IrSpec) -> dict[str, Any]:
    """Compact, human-oriented view of *ir*."""
    return {
        "info": {
            "title": ir.info.title,
            "version": ir.info.version,
            "description": ir.info.description,
        },
        "servers": [server.url for server in ir.servers],
        "schemas": [
            {"name": schema.name.pascal_case, "kind": schema.kind}
            for schema in ir.schemas
        ],
        "operations": [
            {
                "name": op.name.camel_case,
                "method": op.method.value,
                "path": op.path,
                "returns": op.return_type.kind,
                "tags": op.tags,
            }
            for op in ir.operations
        ],
        "modules": [module.name.original for module in ir.modules],
    }
