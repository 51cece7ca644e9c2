"""Typer application and CLI entry point for specir.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``validate``, ``inspect``, ``generate``, ``init``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Errors derived from
:class:`~specir.exceptions.SpecirError` exit with their own exit code.

See Also:
    :mod:`specir.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any

import typer

from specir import __version__
from specir.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="specir",
    help="Compile OpenAPI 3.x documents into a generator-agnostic IR.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specir {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~specir.output.OutputManager` and configures
    logging: DEBUG with ``--verbose``, WARNING otherwise.
    """
    from specir.output import OutputManager, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from specir.commands.generate import generate_command  # noqa: E402
from specir.commands.init import init_command  # noqa: E402
from specir.commands.inspect import inspect_command  # noqa: E402
from specir.commands.validate import validate_command  # noqa: E402

app.command("validate")(validate_command)
app.command("inspect")(inspect_command)
app.command("generate")(generate_command)
app.command("init")(init_command)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``specir`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specir.exceptions import SpecirError
        from specir.output import error

        if isinstance(exc, SpecirError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
