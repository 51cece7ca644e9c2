"""Validate command -- check that a document parses and compiles.

Implements ``specir validate``: loads the document, checks its OpenAPI
version, runs the full :func:`~specir.transform.transform` pipeline and prints
a short summary. Naming options are taken from ``.specir.yaml`` when present,
so the summary matches what ``inspect`` and ``generate`` compile. Any parse or
transform failure exits with the error's own exit code.
"""

from __future__ import annotations

import typer

from specir.exceptions import SpecirError
from specir.output import debug, error, print_table, success


def validate_command(
    input: str = typer.Argument(
        ..., help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
) -> None:
    """Validate an OpenAPI document and print a summary.

    Example::

        specir validate openapi.yaml
        curl -s https://api.example.com/openapi.json | specir validate -
    """
    from specir.config import load_config
    from specir.models import TransformOptions
    from specir.parser import load_spec, parse_spec
    from specir.transform import transform

    try:
        config = load_config()
        options = config.transform_options() if config else TransformOptions()
        raw = load_spec(input)
        spec = parse_spec(raw)
        debug(f"Parsed OpenAPI {spec.openapi} document with {len(spec.paths)} paths")
        ir = transform(spec, options)
    except SpecirError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    rows = [
        ["OpenAPI", spec.openapi],
        ["Title", ir.info.title],
        ["Version", ir.info.version],
        ["Paths", str(len(spec.paths))],
        ["Schemas", str(len(ir.schemas))],
        ["Operations", str(len(ir.operations))],
    ]
    print_table(["Field", "Value"], rows, title="Summary")
    success(f"{input} is valid.")
