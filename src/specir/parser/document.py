"""Typed OpenAPI 3.x document model.

These models mirror the parts of the OpenAPI 3.0/3.1 object model that the
transformer reads. They accept the camelCase keys used in documents and also
populate by Python field name, which keeps tests and programmatic construction
readable::

    Schema(type="object", properties={"id": Schema(type="integer")})

Every referencable object carries ``ref`` (the ``$ref`` key). Unknown keys,
including ``x-`` vendor extensions, are ignored.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Path item keys holding operations, in the order they are read.
OPERATION_METHODS: tuple[str, ...] = (
    "get",
    "post",
    "put",
    "delete",
    "patch",
    "options",
    "head",
    "trace",
)


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- Schema ---


class Discriminator(_DocumentModel):
    property_name: str = Field(alias="propertyName")
    mapping: Optional[dict[str, str]] = None


class Schema(_DocumentModel):
    """A JSON-Schema-like schema node.

    ``type`` may be a single type name or, in OpenAPI 3.1, a list of names
    such as ``["string", "null"]``. Whether ``const`` was given at all is
    available through :attr:`has_const`, since ``const: null`` is legal.
    """

    ref: Optional[str] = Field(default=None, alias="$ref")
    type_: Optional[Union[str, list[str]]] = Field(default=None, alias="type")
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    nullable: bool = False
    properties: dict[str, Schema] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    additional_properties: Optional[Union[bool, Schema]] = Field(
        default=None, alias="additionalProperties"
    )
    items: Optional[Schema] = None
    all_of: list[Schema] = Field(default_factory=list, alias="allOf")
    one_of: list[Schema] = Field(default_factory=list, alias="oneOf")
    any_of: list[Schema] = Field(default_factory=list, alias="anyOf")
    discriminator: Optional[Discriminator] = None
    enum: Optional[list[Any]] = None
    const: Any = None
    # Constraints
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: Optional[Union[bool, float]] = Field(
        default=None, alias="exclusiveMinimum"
    )
    exclusive_maximum: Optional[Union[bool, float]] = Field(
        default=None, alias="exclusiveMaximum"
    )
    multiple_of: Optional[float] = Field(default=None, alias="multipleOf")
    min_length: Optional[int] = Field(default=None, alias="minLength")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    pattern: Optional[str] = None
    min_items: Optional[int] = Field(default=None, alias="minItems")
    max_items: Optional[int] = Field(default=None, alias="maxItems")
    unique_items: Optional[bool] = Field(default=None, alias="uniqueItems")
    read_only: bool = Field(default=False, alias="readOnly")
    write_only: bool = Field(default=False, alias="writeOnly")
    deprecated: bool = False
    example: Any = None

    @property
    def has_const(self) -> bool:
        return "const" in self.model_fields_set


# --- Request / response ---


class Encoding(_DocumentModel):
    content_type: Optional[str] = Field(default=None, alias="contentType")


class MediaType(_DocumentModel):
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    item_schema: Optional[Schema] = Field(
        default=None,
        alias="itemSchema",
        description="Schema of one event in a text/event-stream response",
    )
    encoding: Optional[dict[str, Encoding]] = None
    example: Any = None


class Parameter(_DocumentModel):
    ref: Optional[str] = Field(default=None, alias="$ref")
    name: Optional[str] = None
    in_: Optional[str] = Field(default=None, alias="in")
    description: Optional[str] = None
    required: bool = False
    deprecated: bool = False
    schema_: Optional[Schema] = Field(default=None, alias="schema")


class RequestBody(_DocumentModel):
    ref: Optional[str] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    content: dict[str, MediaType] = Field(default_factory=dict)
    required: bool = False


class Response(_DocumentModel):
    ref: Optional[str] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    headers: Optional[dict[str, Any]] = None
    content: dict[str, MediaType] = Field(default_factory=dict)


# --- Paths ---


class Operation(_DocumentModel):
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=dict)
    deprecated: bool = False
    security: Optional[list[dict[str, list[str]]]] = None

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value: Any) -> Any:
        # YAML reads unquoted status codes (200:) as integers.
        if isinstance(value, dict):
            return {str(key): item for key, item in value.items()}
        return value


class PathItem(_DocumentModel):
    ref: Optional[str] = Field(default=None, alias="$ref")
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    post: Optional[Operation] = None
    put: Optional[Operation] = None
    delete: Optional[Operation] = None
    patch: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    trace: Optional[Operation] = None
    parameters: list[Parameter] = Field(default_factory=list)

    def operations(self) -> list[tuple[str, Operation]]:
        """Return ``(method, operation)`` pairs in :data:`OPERATION_METHODS` order."""
        result = []
        for method in OPERATION_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                result.append((method, operation))
        return result


# --- Components and document root ---


class SecurityScheme(_DocumentModel):
    ref: Optional[str] = Field(default=None, alias="$ref")
    type_: Optional[str] = Field(default=None, alias="type")
    description: Optional[str] = None
    name: Optional[str] = None
    in_: Optional[str] = Field(default=None, alias="in")
    scheme: Optional[str] = None
    bearer_format: Optional[str] = Field(default=None, alias="bearerFormat")
    flows: Optional[dict[str, Any]] = None
    open_id_connect_url: Optional[str] = Field(default=None, alias="openIdConnectUrl")


class Components(_DocumentModel):
    schemas: dict[str, Schema] = Field(default_factory=dict)
    parameters: dict[str, Parameter] = Field(default_factory=dict)
    request_bodies: dict[str, RequestBody] = Field(
        default_factory=dict, alias="requestBodies"
    )
    responses: dict[str, Response] = Field(default_factory=dict)
    security_schemes: dict[str, SecurityScheme] = Field(
        default_factory=dict, alias="securitySchemes"
    )


class Contact(_DocumentModel):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(_DocumentModel):
    name: str
    url: Optional[str] = None


class Info(_DocumentModel):
    title: str
    description: Optional[str] = None
    version: str
    terms_of_service: Optional[str] = Field(default=None, alias="termsOfService")
    contact: Optional[Contact] = None
    license: Optional[License] = None

    @field_validator("version", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value


class Server(_DocumentModel):
    url: str
    description: Optional[str] = None
    variables: Optional[dict[str, Any]] = None


class Tag(_DocumentModel):
    name: str
    description: Optional[str] = None


class OpenApiSpec(_DocumentModel):
    openapi: str
    info: Info
    servers: list[Server] = Field(default_factory=list)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Optional[Components] = None
    tags: list[Tag] = Field(default_factory=list)
    security: Optional[list[dict[str, list[str]]]] = None

    @field_validator("openapi", mode="before")
    @classmethod
    def _stringify_openapi(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("paths", mode="before")
    @classmethod
    def _drop_empty_paths(cls, value: Any) -> Any:
        # "/health:" with no body loads as None.
        if isinstance(value, dict):
            return {key: item or {} for key, item in value.items()}
        return value


Schema.model_rebuild()
