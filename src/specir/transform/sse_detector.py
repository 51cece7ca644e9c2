"""Classify an operation's responses as standard, Server-Sent Events or void."""

from __future__ import annotations

from typing import Optional

from specir.ir.operations import (
    IrResponse,
    IrReturnType,
    SseReturn,
    StandardReturn,
    VoidReturn,
)
from specir.ir.types import AnyType, IrType, UnionType
from specir.parser.document import MediaType, Response, Schema
from specir.transform.name_normalizer import to_pascal_case
from specir.transform.schema_resolver import schema_to_type

EVENT_STREAM = "text/event-stream"
JSON = "application/json"

# Checked in order; the first present wins.
SUCCESS_STATUS_KEYS = ("200", "201", "2XX", "default")


def detect_return_type(operation_name: str, responses: dict[str, Response]) -> IrReturnType:
    """Derive the return type of an operation from its resolved responses.

    An event-stream success response yields :class:`SseReturn`; when the same
    response also offers JSON, the JSON payload is attached as
    ``json_response`` so generators can expose both call styles.

    Args:
        operation_name: Raw operation name, used for the synthesized event
            union name ``<Operation>StreamEvent``.
        responses: Status code -> response, already ``$ref``-resolved.
    """
    response = find_success_response(responses)
    if response is None or not response.content:
        return VoidReturn()

    sse = _find_media(response.content, EVENT_STREAM)
    json = _find_media(response.content, JSON)

    if sse is not None:
        return _sse_return(operation_name, sse, json, response.description)

    media = json if json is not None else next(iter(response.content.values()))
    return StandardReturn(
        response=IrResponse(
            response_type=_media_type(media), description=response.description
        )
    )


def find_success_response(responses: dict[str, Response]) -> Optional[Response]:
    for key in SUCCESS_STATUS_KEYS:
        if key in responses:
            return responses[key]
    return None


def find_content_type(content: dict[str, MediaType], wanted: str) -> Optional[str]:
    """Key of *content* whose media type is *wanted*, ignoring parameters."""
    # Parameters such as "; charset=utf-8" do not change the media type.
    for content_type in content:
        if content_type.split(";", 1)[0].strip().lower() == wanted:
            return content_type
    return None


def _find_media(content: dict[str, MediaType], wanted: str) -> Optional[MediaType]:
    content_type = find_content_type(content, wanted)
    return content[content_type] if content_type is not None else None


def _media_type(media: MediaType) -> IrType:
    if media.schema_ is None:
        return AnyType()
    return schema_to_type(media.schema_)


def _sse_return(
    operation_name: str,
    sse: MediaType,
    json: Optional[MediaType],
    description: Optional[str],
) -> SseReturn:
    variants: list[IrType] = []
    union_name = None

    item = sse.item_schema
    if item is not None:
        event_type, variants, union_name = _event_info(operation_name, item)
    else:
        event_type = _media_type(sse)

    json_response = None
    if json is not None:
        json_response = IrResponse(response_type=_media_type(json), description=description)

    return SseReturn(
        event_type=event_type,
        variants=variants,
        variant_union_name=union_name,
        also_has_json=json_response is not None,
        json_response=json_response,
    )


def _event_info(
    operation_name: str, item: Schema
) -> tuple[IrType, list[IrType], Optional[str]]:
    if item.ref is None and item.one_of:
        variants = [schema_to_type(variant) for variant in item.one_of]
        name = f"{to_pascal_case(operation_name)}StreamEvent"
        return UnionType(variants=tuple(variants)), variants, name
    return schema_to_type(item), [], None
