"""OpenAPI-to-IR compiler.

Typical usage::

    from specir.parser import load_document
    from specir.transform import TransformOptions, transform

    ir = transform(load_document("openapi.yaml"), TransformOptions())

Sub-modules:

* :mod:`~specir.transform.name_normalizer` -- casing variants and
  route-derived operation names.
* :mod:`~specir.transform.schema_resolver` -- schema nodes to IR types and
  declarations.
* :mod:`~specir.transform.sse_detector` -- standard / SSE / void return types.
* :mod:`~specir.transform.promote_inline` -- hoisting of inline objects.
* :mod:`~specir.transform.spec_to_ir` -- the :func:`transform` pipeline.
"""

from specir.models import NamingStrategy, TransformOptions
from specir.transform.spec_to_ir import transform

__all__ = ["NamingStrategy", "TransformOptions", "transform"]
