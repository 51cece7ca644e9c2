"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specir.exceptions.SpecirError` subclass.
Build scripts can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ specir validate broken.yaml
    $ echo $?
    8   # EXIT_TRANSFORM_ERROR -- a $ref could not be resolved
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded, parsed or version-checked."""

EXIT_TRANSFORM_ERROR = 8
"""The document parsed but could not be compiled into the IR."""

EXIT_GENERATOR_ERROR = 9
"""A code generator failed to produce or write its output."""
