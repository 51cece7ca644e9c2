"""Configuration and transformation option models.

Project configuration is read from ``.specir.yaml`` (see :mod:`specir.config`)
and validated into :class:`ProjectConfig`. The transformer itself only sees
:class:`TransformOptions`, built from the ``naming`` section.

Generator sections use ``extra="allow"`` so that each generator can declare
its own options without changes here; unknown keys are preserved in
``model_extra`` and validated by the generator that owns them.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NamingStrategy(str, enum.Enum):
    """How operation names are derived.

    ``use_operation_id`` falls back to the route-derived name for operations
    without an ``operationId``.
    """

    USE_OPERATION_ID = "use_operation_id"
    USE_ROUTE_BASED = "use_route_based"


class SplitBy(str, enum.Enum):
    """How operations are grouped into output files."""

    OPERATION = "operation"
    TAG = "tag"
    ROUTE = "route"


class NamingConfig(BaseModel):
    strategy: NamingStrategy = NamingStrategy.USE_OPERATION_ID
    aliases: dict[str, str] = Field(
        default_factory=dict,
        description="Resolved operation name -> name to use instead",
    )


class GeneratorConfig(BaseModel):
    """Settings for one generator under the ``generators`` key.

    Example::

        generators:
          ir-json:
            output: build/ir
            split_by: tag
            indent: 4
    """

    model_config = ConfigDict(extra="allow")

    output: str = Field(default="generated", description="Output directory")
    split_by: SplitBy = Field(
        default=SplitBy.TAG, description="Grouping of operations in per-group files"
    )
    base_url: Optional[str] = Field(
        default=None, description="Override the first server URL of the document"
    )


class ProjectConfig(BaseModel):
    input: str = Field(
        default="openapi.yaml", description="URL or file path to the OpenAPI document"
    )
    naming: NamingConfig = Field(default_factory=NamingConfig)
    generators: dict[str, GeneratorConfig] = Field(default_factory=dict)

    def transform_options(self) -> TransformOptions:
        return TransformOptions(
            naming_strategy=self.naming.strategy,
            aliases=dict(self.naming.aliases),
        )


class TransformOptions(BaseModel):
    """Options consumed by :func:`specir.transform.transform`.

    ``aliases`` keys are matched against the raw operation name (the
    ``operationId`` or the route-derived name) before normalization.
    """

    naming_strategy: NamingStrategy = NamingStrategy.USE_OPERATION_ID
    aliases: dict[str, str] = Field(default_factory=dict)
