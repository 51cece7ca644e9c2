"""Tests for specir.generators."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from specir.exceptions import GeneratorError
from specir.generators import (
    CodeGenerator,
    GeneratedFile,
    IrJsonGenerator,
    available_generators,
    get_generator,
    write_files,
)
from specir.ir import IrSpec
from specir.models import GeneratorConfig, SplitBy
from specir.parser.document import OpenApiSpec
from specir.parser.loader import parse_spec
from specir.transform import transform


@pytest.fixture
def petstore_ir(petstore_spec: OpenApiSpec) -> IrSpec:
    return transform(petstore_spec)


# ---------------------------------------------------------------------------
# ir-json generator
# ---------------------------------------------------------------------------


class TestIrJsonGenerator:
    def test_writes_ir_and_modules(self, petstore_ir: IrSpec) -> None:
        files = IrJsonGenerator().generate(petstore_ir, GeneratorConfig())
        assert [f.path for f in files] == [
            "ir.json",
            "modules/default.json",
            "modules/pets.json",
            "modules/store.json",
        ]
        data = json.loads(files[0].content)
        assert data["info"]["title"] == "Petstore API"
        assert IrSpec.model_validate(data).model_dump() == petstore_ir.model_dump()

    def test_module_payload(self, petstore_ir: IrSpec) -> None:
        files = IrJsonGenerator().generate(petstore_ir, GeneratorConfig())
        store = json.loads(files[-1].content)
        assert store["name"]["original"] == "store"
        assert [op["name"]["original"] for op in store["operations"]] == ["showPetById"]

    def test_split_by_route(self, petstore_ir: IrSpec) -> None:
        files = IrJsonGenerator().generate(petstore_ir, GeneratorConfig(split_by=SplitBy.ROUTE))
        assert [f.path for f in files[1:]] == [
            "modules/pets.json",
            "modules/store.json",
            "modules/uploads.json",
        ]

    def test_colliding_group_names_get_suffix(self) -> None:
        def op(operation_id: str, tag: str) -> dict:
            return {
                "operationId": operation_id,
                "tags": [tag],
                "responses": {"204": {"description": "done"}},
            }

        ir = transform(
            parse_spec(
                {
                    "openapi": "3.1.0",
                    "info": {"title": "T", "version": "1"},
                    "paths": {
                        "/a": {"get": op("dup", "Pet")},
                        "/b": {"get": op("dup", "pet")},
                    },
                }
            )
        )
        by_operation = IrJsonGenerator().generate(ir, GeneratorConfig(split_by=SplitBy.OPERATION))
        assert [f.path for f in by_operation[1:]] == ["modules/dup.json", "modules/dup_2.json"]

        by_tag = IrJsonGenerator().generate(ir, GeneratorConfig())
        assert [f.path for f in by_tag[1:]] == ["modules/pet.json", "modules/pet_2.json"]
        assert json.loads(by_tag[2].content)["name"]["original"] == "pet"

    def test_options_from_extra_keys(self, petstore_ir: IrSpec) -> None:
        config = GeneratorConfig.model_validate({"indent": 0, "include_modules": False})
        files = IrJsonGenerator().generate(petstore_ir, config)
        assert [f.path for f in files] == ["ir.json"]
        assert "\n" not in files[0].content.rstrip("\n")
        assert files[0].content.endswith("\n")

    def test_invalid_options(self, petstore_ir: IrSpec) -> None:
        config = GeneratorConfig.model_validate({"indent": -1})
        with pytest.raises(GeneratorError, match="Invalid options"):
            IrJsonGenerator().generate(petstore_ir, config)

    def test_base_url_override(self, petstore_ir: IrSpec) -> None:
        config = GeneratorConfig(base_url="https://staging.example.com")
        data = json.loads(IrJsonGenerator().generate(petstore_ir, config)[0].content)
        assert [s["url"] for s in data["servers"]] == [
            "https://staging.example.com",
            "https://petstore.example.com/v1",
            "http://localhost:8080/v1",
        ]
        # The IR itself is unchanged.
        assert len(petstore_ir.servers) == 2


# ---------------------------------------------------------------------------
# write_files
# ---------------------------------------------------------------------------


class TestWriteFiles:
    def test_writes_nested_paths(self, tmp_path: Path) -> None:
        written = write_files(
            [GeneratedFile(path="a.txt", content="A"), GeneratedFile(path="sub/b.txt", content="B")],
            tmp_path / "out",
        )
        assert [p.read_text(encoding="utf-8") for p in written] == ["A", "B"]
        assert (tmp_path / "out" / "sub" / "b.txt").is_file()

    @pytest.mark.parametrize("path", ["../escape.txt", "sub/../../escape.txt", "/etc/passwd"])
    def test_refuses_escaping_paths(self, tmp_path: Path, path: str) -> None:
        with pytest.raises(GeneratorError, match="Refusing to write outside"):
            write_files([GeneratedFile(path=path, content="x")], tmp_path / "out")
        assert not (tmp_path / "escape.txt").exists()


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class _DummyGenerator(CodeGenerator):
    @property
    def id(self) -> str:
        return "dummy"

    def generate(self, ir, config):
        return [GeneratedFile(path="names.txt", content=ir.info.title)]


class TestRegistry:
    def test_builtin_available(self) -> None:
        assert "ir-json" in available_generators()
        assert isinstance(get_generator("ir-json"), IrJsonGenerator)

    def test_unknown_generator(self) -> None:
        with pytest.raises(GeneratorError, match="Unknown generator 'nope'.*ir-json"):
            get_generator("nope")

    def test_entry_point_generator(self) -> None:
        ep = MagicMock()
        ep.name = "dummy"
        ep.load.return_value = _DummyGenerator
        with patch("specir.generators.importlib.metadata.entry_points", return_value=[ep]):
            generator = get_generator("dummy")
            assert "dummy" in available_generators()
        assert generator.id == "dummy"
        assert generator.description == ""

    def test_entry_point_load_failure(self) -> None:
        ep = MagicMock()
        ep.name = "broken"
        ep.load.side_effect = ImportError("no module named broken")
        with patch("specir.generators.importlib.metadata.entry_points", return_value=[ep]):
            with pytest.raises(GeneratorError, match="Failed to load generator 'broken'"):
                get_generator("broken")

    def test_entry_point_wrong_type(self) -> None:
        ep = MagicMock()
        ep.name = "plain"
        ep.load.return_value = object
        with patch("specir.generators.importlib.metadata.entry_points", return_value=[ep]):
            with pytest.raises(GeneratorError, match="does not implement CodeGenerator"):
                get_generator("plain")
