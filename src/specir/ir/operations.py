"""Operations, parameters, request bodies and return types."""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from specir.ir.types import IrType, NormalizedName


class HttpMethod(str, enum.Enum):
    """HTTP methods, in the order operations are read from a path item."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    TRACE = "TRACE"


class IrParameterLocation(str, enum.Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class IrParameter(BaseModel):
    name: NormalizedName
    original_name: str = Field(description="Name as sent on the wire")
    location: IrParameterLocation
    param_type: IrType
    required: bool = False
    description: Optional[str] = None


class IrFieldEncoding(BaseModel):
    """Per-field content type of a ``multipart/form-data`` body."""

    field_name: str
    content_type: Optional[str] = None


class IrRequestBody(BaseModel):
    body_type: IrType
    required: bool = False
    content_type: str = "application/json"
    description: Optional[str] = None
    encoding: Optional[list[IrFieldEncoding]] = None


class IrResponse(BaseModel):
    response_type: IrType
    description: Optional[str] = None


# --- Return types ---


class StandardReturn(BaseModel):
    kind: Literal["standard"] = "standard"
    response: IrResponse


class SseReturn(BaseModel):
    """Server-Sent Events stream, optionally also callable as plain JSON.

    ``variants`` is non-empty when the per-event schema is a ``oneOf``; in
    that case ``variant_union_name`` names the shared event union so that
    generators can declare it once.
    """

    kind: Literal["sse"] = "sse"
    event_type: IrType
    variants: list[IrType] = Field(default_factory=list)
    variant_union_name: Optional[str] = None
    also_has_json: bool = False
    json_response: Optional[IrResponse] = None


class VoidReturn(BaseModel):
    kind: Literal["void"] = "void"


IrReturnType = Annotated[
    Union[StandardReturn, SseReturn, VoidReturn],
    Field(discriminator="kind"),
]


class IrOperation(BaseModel):
    name: NormalizedName
    method: HttpMethod
    path: str
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[IrParameter] = Field(default_factory=list)
    request_body: Optional[IrRequestBody] = None
    return_type: IrReturnType = Field(default_factory=VoidReturn)
    deprecated: bool = False
