"""Generate command -- run generators over the compiled IR.

Implements ``specir generate``. The document and generator sections come
from ``.specir.yaml``; ``--input``, ``--output`` and ``--generator`` override
them. Without a config file, ``--generator`` selects a generator with default
settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from specir.exceptions import SpecirError
from specir.output import debug, error, info, success


def generate_command(
    input: Optional[str] = typer.Option(
        None, "--input", "-i", help="OpenAPI document (overrides config)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory (overrides config)."
    ),
    generator: Optional[str] = typer.Option(
        None, "--generator", "-g", help="Run only this generator."
    ),
) -> None:
    """Compile the document and write every configured generator's output.

    Example::

        specir generate
        specir generate --input openapi.yaml --generator ir-json -o build/ir
    """
    from specir.config import load_config
    from specir.exceptions import InvalidUsageError
    from specir.generators import get_generator, write_files
    from specir.models import GeneratorConfig, ProjectConfig
    from specir.parser import load_document
    from specir.transform import transform

    try:
        config = load_config() or ProjectConfig()
        targets = dict(config.generators)
        if generator is not None:
            targets = {generator: targets.get(generator, GeneratorConfig())}
        if not targets:
            raise InvalidUsageError(
                "No generators configured. Run 'specir init' or pass --generator."
            )

        source = input or config.input
        info(f"Loading {source}")
        ir = transform(load_document(source), config.transform_options())
        debug(f"IR has {len(ir.schemas)} schemas and {len(ir.operations)} operations")

        for generator_id, generator_config in targets.items():
            out_dir = output or Path(generator_config.output)
            files = get_generator(generator_id).generate(ir, generator_config)
            write_files(files, out_dir)
            success(f"{generator_id}: wrote {len(files)} file(s) to {out_dir}")
    except SpecirError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
