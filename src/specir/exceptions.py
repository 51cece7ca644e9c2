"""Exception hierarchy for specir.

All exceptions inherit from :class:`SpecirError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specir.exit_codes`.
The top-level error handler in :func:`specir.app.main` catches
``SpecirError`` and exits with the appropriate code.

Subclass hierarchy::

    SpecirError                     (exit 1)
    +-- InvalidUsageError           (exit 2)
    +-- SpecParseError              (exit 7)
    +-- ConfigError                 (exit 1)
    +-- TransformError              (exit 8)
    |   +-- ResolveError            (exit 8)
    |       +-- InvalidRefFormatError
    |       +-- RefTargetNotFoundError
    +-- GeneratorError              (exit 9)

None of these are retryable: the input document is static, so the same
input always produces the same error.
"""

from __future__ import annotations

from specir.exit_codes import (
    EXIT_GENERATOR_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_TRANSFORM_ERROR,
)


class SpecirError(Exception):
    """Base exception for all specir errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specir.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecirError):
    """Raised for invalid CLI arguments or missing required inputs."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecirError):
    """Raised when the OpenAPI document cannot be loaded, parsed, or has an unsupported version."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(SpecirError):
    """Raised for project configuration problems (unreadable YAML, invalid fields)."""

    exit_code = EXIT_GENERIC_FAILURE


class TransformError(SpecirError):
    """Raised when a parsed document cannot be compiled into the IR.

    Used directly as the catch-all for schema-to-declaration failures;
    reference problems use the :class:`ResolveError` subclasses.
    """

    exit_code = EXIT_TRANSFORM_ERROR


class ResolveError(TransformError):
    """Base class for ``$ref`` resolution failures.

    Args:
        message: Human-readable error description.
        ref: The offending ``$ref`` pointer, reported verbatim.
    """

    def __init__(self, message: str, ref: str):
        super().__init__(message)
        self.ref = ref


class InvalidRefFormatError(ResolveError):
    """Raised for a ``$ref`` that is not of the form ``#/components/<section>/<name>``."""

    def __init__(self, ref: str, detail: str | None = None):
        message = f"Invalid $ref format: {ref}"
        if detail:
            message += f" ({detail})"
        super().__init__(message, ref)


class RefTargetNotFoundError(ResolveError):
    """Raised when a ``$ref`` names a component that does not exist."""

    def __init__(self, ref: str):
        super().__init__(f"$ref target not found: {ref}", ref)


class GeneratorError(SpecirError):
    """Raised when a code generator is unknown, misconfigured, or fails to write output."""

    exit_code = EXIT_GENERATOR_ERROR
