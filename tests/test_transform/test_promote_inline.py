"""Tests for specir.transform.promote_inline."""

from __future__ import annotations

from typing import Any

from specir.ir import (
    ArrayType,
    HttpMethod,
    InlineField,
    IntegerType,
    IrAliasSchema,
    IrField,
    IrInfo,
    IrObjectSchema,
    IrOperation,
    IrParameter,
    IrParameterLocation,
    IrRequestBody,
    IrResponse,
    IrSpec,
    IrUnionSchema,
    MapType,
    ObjectType,
    RefType,
    SseReturn,
    StandardReturn,
    StringType,
    UnionType,
)
from specir.parser.loader import parse_spec
from specir.transform import transform
from specir.transform.name_normalizer import normalize_name
from specir.transform.promote_inline import promote_inline_objects


def _obj(**fields: Any) -> ObjectType:
    return ObjectType(fields=tuple(InlineField(name=k, type=v) for k, v in fields.items()))


def _field(name: str, field_type: Any) -> IrField:
    return IrField(name=normalize_name(name), original_name=name, field_type=field_type)


def _spec(schemas: list, operations: list | None = None) -> IrSpec:
    return IrSpec(
        info=IrInfo(title="T", version="1"),
        schemas=schemas,
        operations=operations or [],
    )


def _names(ir: IrSpec) -> list[str]:
    return [schema.name.pascal_case for schema in ir.schemas]


class TestSchemaPromotion:
    def test_field_object_promoted(self) -> None:
        ir = _spec([IrObjectSchema(name=normalize_name("Pet"), fields=[_field("owner", _obj(name=StringType()))])])
        promote_inline_objects(ir)

        assert _names(ir) == ["Pet", "PetOwner"]
        assert ir.schemas[0].fields[0].field_type == RefType(name="PetOwner")
        owner = ir.schemas[1]
        assert isinstance(owner, IrObjectSchema)
        assert owner.fields[0].original_name == "name"
        assert owner.fields[0].field_type == StringType()

    def test_name_collision_gets_suffix(self) -> None:
        ir = _spec(
            [
                IrObjectSchema(name=normalize_name("Pet"), fields=[_field("owner", _obj(name=StringType()))]),
                IrObjectSchema(name=normalize_name("PetOwner")),
            ]
        )
        promote_inline_objects(ir)
        assert _names(ir) == ["Pet", "PetOwner", "PetOwner2"]
        assert ir.schemas[0].fields[0].field_type == RefType(name="PetOwner2")

    def test_empty_object_left_in_place(self) -> None:
        ir = _spec([IrObjectSchema(name=normalize_name("Pet"), fields=[_field("extra", ObjectType())])])
        promote_inline_objects(ir)
        assert _names(ir) == ["Pet"]
        assert ir.schemas[0].fields[0].field_type == ObjectType()

    def test_nested_objects_parent_first(self) -> None:
        inner = _obj(city=StringType())
        ir = _spec([IrObjectSchema(name=normalize_name("User"), fields=[_field("profile", _obj(address=inner))])])
        promote_inline_objects(ir)

        assert _names(ir) == ["User", "UserProfile", "UserProfileAddress"]
        assert ir.schemas[1].fields[0].field_type == RefType(name="UserProfileAddress")

    def test_container_suffixes(self) -> None:
        ir = _spec(
            [
                IrObjectSchema(
                    name=normalize_name("Pet"),
                    fields=[
                        _field("tags", ArrayType(item=_obj(label=StringType()))),
                        _field("scores", MapType(value=_obj(value=IntegerType()))),
                        _field("either", UnionType(variants=(StringType(), _obj(x=IntegerType())))),
                    ],
                )
            ]
        )
        promote_inline_objects(ir)

        assert _names(ir) == ["Pet", "PetTagsItem", "PetScoresValue", "PetEitherVariant2"]
        fields = ir.schemas[0].fields
        assert fields[0].field_type == ArrayType(item=RefType(name="PetTagsItem"))
        assert fields[1].field_type == MapType(value=RefType(name="PetScoresValue"))
        assert fields[2].field_type == UnionType(variants=(StringType(), RefType(name="PetEitherVariant2")))

    def test_union_and_alias_declarations(self) -> None:
        ir = _spec(
            [
                IrUnionSchema(name=normalize_name("Shape"), variants=[_obj(radius=IntegerType())]),
                IrAliasSchema(name=normalize_name("Wrapped"), target=ArrayType(item=_obj(a=StringType()))),
            ]
        )
        promote_inline_objects(ir)
        assert _names(ir) == ["Shape", "Wrapped", "ShapeVariant1", "WrappedItem"]

    def test_additional_properties_value(self) -> None:
        ir = _spec(
            [
                IrObjectSchema(
                    name=normalize_name("Bag"),
                    additional_properties=_obj(count=IntegerType()),
                )
            ]
        )
        promote_inline_objects(ir)
        assert ir.schemas[0].additional_properties == RefType(name="BagValue")

    def test_idempotent(self) -> None:
        ir = _spec([IrObjectSchema(name=normalize_name("Pet"), fields=[_field("owner", _obj(name=StringType()))])])
        promote_inline_objects(ir)
        once = ir.model_dump()
        promote_inline_objects(ir)
        assert ir.model_dump() == once


class TestOperationPromotion:
    def _operation(self, **kwargs: Any) -> IrOperation:
        return IrOperation(name=normalize_name("createUser"), method=HttpMethod.POST, path="/users", **kwargs)

    def test_response_body_and_params(self) -> None:
        op = self._operation(
            parameters=[
                IrParameter(
                    name=normalize_name("filter"),
                    original_name="filter",
                    location=IrParameterLocation.QUERY,
                    param_type=_obj(q=StringType()),
                )
            ],
            request_body=IrRequestBody(body_type=_obj(email=StringType())),
            return_type=StandardReturn(response=IrResponse(response_type=_obj(id=IntegerType()))),
        )
        ir = _spec([], [op])
        promote_inline_objects(ir)

        assert _names(ir) == ["CreateUserResponse", "CreateUserBody", "CreateUserFilter"]
        assert op.return_type.response.response_type == RefType(name="CreateUserResponse")
        assert op.request_body.body_type == RefType(name="CreateUserBody")
        assert op.parameters[0].param_type == RefType(name="CreateUserFilter")

    def test_sse_variants(self) -> None:
        variants = [_obj(text=StringType()), RefType(name="Done")]
        op = self._operation(
            return_type=SseReturn(
                event_type=UnionType(variants=tuple(variants)),
                variants=variants,
                variant_union_name="CreateUserStreamEvent",
                also_has_json=True,
                json_response=IrResponse(response_type=_obj(ok=StringType())),
            )
        )
        ir = _spec([], [op])
        promote_inline_objects(ir)

        ret = op.return_type
        assert _names(ir) == ["CreateUserEventVariant1", "CreateUserResponse"]
        assert ret.variants == [RefType(name="CreateUserEventVariant1"), RefType(name="Done")]
        assert ret.event_type == UnionType(variants=tuple(ret.variants))
        assert ret.json_response.response_type == RefType(name="CreateUserResponse")


class TestPromotionThroughTransform:
    def test_petstore(self, petstore_spec) -> None:
        ir = transform(petstore_spec)
        assert _names(ir) == [
            "Pet",
            "Pets",
            "Error",
            "PetOwner",
            "UploadFileBody",
            "UploadFileBodyMeta",
        ]
        owner = ir.schema_lookup()["PetOwner"]
        assert [(f.original_name, f.required) for f in owner.fields] == [("name", True), ("age", False)]

    def test_no_inline_objects_remain(self, streaming_spec) -> None:
        ir = transform(streaming_spec)
        names = set(_names(ir))
        assert {"ChatResponseUsage", "ListJobsProgressEvent"} <= names

        def check(t: Any) -> None:
            assert not (isinstance(t, ObjectType) and t.fields)
            for child in getattr(t, "variants", ()) or getattr(t, "parts", ()):
                check(child)
            for attr in ("item", "value"):
                if hasattr(t, attr):
                    check(getattr(t, attr))

        for schema in ir.schemas:
            for field in getattr(schema, "fields", []):
                check(field.field_type)
        for op in ir.operations:
            if op.request_body is not None:
                check(op.request_body.body_type)
            if isinstance(op.return_type, SseReturn):
                check(op.return_type.event_type)

    def test_name_collision_with_component(self) -> None:
        spec = parse_spec(
            {
                "openapi": "3.1.0",
                "info": {"title": "T", "version": "1"},
                "components": {
                    "schemas": {
                        "Pet": {
                            "type": "object",
                            "properties": {
                                "owner": {"type": "object", "properties": {"name": {"type": "string"}}}
                            },
                        },
                        "PetOwner": {"type": "object", "properties": {"id": {"type": "integer"}}},
                    }
                },
            }
        )
        ir = transform(spec)
        assert _names(ir) == ["Pet", "PetOwner", "PetOwner2"]
        assert ir.schemas[0].fields[0].field_type == RefType(name="PetOwner2")
