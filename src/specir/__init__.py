"""specir -- Compile OpenAPI 3.x documents into a generator-agnostic IR.

This package turns a loosely-typed, self-referential OpenAPI document into a
canonical, fully-resolved intermediate representation (:class:`~specir.ir.IrSpec`)
that per-target code generators consume. The hard part lives in
:mod:`specir.transform`: reference resolution, schema-to-type unification,
operation naming, streaming-response detection and promotion of anonymous
inline objects into named declarations.

Typical usage::

    from specir.parser import load_spec, parse_spec
    from specir.transform import transform

    spec = parse_spec(load_spec("openapi.yaml"))
    ir = transform(spec)

Modules:
    app: Typer application and CLI entry point.
    models: Configuration models (naming options, generator settings).
    config: Project config file loading.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting helpers.
"""

__version__ = "0.1.0"
