"""Init command -- write a starter ``.specir.yaml``."""

from __future__ import annotations

import typer

from specir.exceptions import SpecirError
from specir.output import error, info, success


def init_command(
    force: bool = typer.Option(
        False, "--force", help="Overwrite an existing config file."
    ),
) -> None:
    """Create ``.specir.yaml`` in the current directory.

    Example::

        specir init
        specir init --force
    """
    from specir.config import write_default_config

    try:
        path = write_default_config(force=force)
    except SpecirError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Created {path.name}")
    info("Next: edit 'input' and run 'specir generate'")
