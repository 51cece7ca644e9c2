"""Integration tests for the specir command line.

Each test drives the real top-level Typer application through the CliRunner,
so option parsing, the root callback and exit codes are exercised together.
Colour is disabled so diagnostics are printed verbatim.
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest
from typer.testing import CliRunner

from specir import __version__
from specir.app import app
from specir.config import CONFIG_FILENAME

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
PETSTORE = str(FIXTURES_DIR / "petstore.yaml")
COMPOSITION = str(FIXTURES_DIR / "composition.yaml")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _invoke(runner: CliRunner, *args: str, **kwargs):
    return runner.invoke(app, ["--no-color", *args], **kwargs)


# ---------------------------------------------------------------------------
# Root options
# ---------------------------------------------------------------------------


class TestRoot:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"specir {__version__}"

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "validate" in result.output
        assert "generate" in result.output


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


class TestValidate:
    def test_valid_document(self, runner: CliRunner, isolated_config: Path) -> None:
        result = _invoke(runner, "validate", PETSTORE)
        assert result.exit_code == 0, result.output
        assert "Title\tPetstore API" in result.output
        assert "Operations\t6" in result.output
        assert "is valid." in result.output

    def test_from_stdin(self, runner: CliRunner, isolated_config: Path) -> None:
        document = json.dumps(
            {"openapi": "3.1.0", "info": {"title": "Piped", "version": "1"}, "paths": {}}
        )
        result = _invoke(runner, "validate", "-", input=document)
        assert result.exit_code == 0, result.output
        assert "Title\tPiped" in result.output

    def test_swagger_rejected(self, runner: CliRunner, tmp_path: Path) -> None:
        spec = tmp_path / "swagger.json"
        spec.write_text(json.dumps({"swagger": "2.0", "info": {}}), encoding="utf-8")
        result = _invoke(runner, "validate", str(spec))
        assert result.exit_code == 7
        assert "Swagger 2.0 is not supported" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = _invoke(runner, "validate", str(tmp_path / "missing.yaml"))
        assert result.exit_code == 7
        assert "not found" in result.output

    def test_reads_project_config(self, runner: CliRunner, isolated_config: Path) -> None:
        (isolated_config / CONFIG_FILENAME).write_text(
            "naming:\n  strategy: guess\n", encoding="utf-8"
        )
        result = _invoke(runner, "validate", PETSTORE)
        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_unresolvable_ref(self, runner: CliRunner, tmp_path: Path) -> None:
        spec = tmp_path / "broken.yaml"
        spec.write_text(
            textwrap.dedent("""\
                openapi: 3.0.3
                info:
                  title: Broken
                  version: "1"
                paths: {}
                components:
                  schemas:
                    Pet:
                      $ref: "#/components/schemas/Missing"
            """),
            encoding="utf-8",
        )
        result = _invoke(runner, "validate", str(spec))
        assert result.exit_code == 8
        assert "#/components/schemas/Missing" in result.output


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


class TestInspect:
    def test_summary_json(self, runner: CliRunner, isolated_config: Path) -> None:
        result = _invoke(runner, "inspect", COMPOSITION, "--format", "json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["info"]["title"] == "Composition API"
        assert data["operations"] == [
            {"name": "getNode", "method": "GET", "path": "/nodes/{nodeId}", "returns": "standard", "tags": []}
        ]
        kinds = {s["name"]: s["kind"] for s in data["schemas"]}
        assert kinds["ContentBlock"] == "union"
        assert kinds["Status"] == "enum"
        assert data["modules"] == ["default"]

    def test_full_dump(self, runner: CliRunner, isolated_config: Path) -> None:
        result = _invoke(runner, "inspect", COMPOSITION, "-f", "json", "--full")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert set(data) == {"info", "servers", "schemas", "operations", "modules"}
        assert data["operations"][0]["return_type"]["kind"] == "standard"

    def test_yaml_default(self, runner: CliRunner, isolated_config: Path) -> None:
        result = _invoke(runner, "inspect", COMPOSITION)
        assert result.exit_code == 0, result.output
        assert "title: Composition API" in result.stdout

    def test_uses_naming_config(self, runner: CliRunner, isolated_config: Path) -> None:
        (isolated_config / CONFIG_FILENAME).write_text(
            "naming:\n  aliases:\n    getNode: fetchNode\n", encoding="utf-8"
        )
        result = _invoke(runner, "inspect", COMPOSITION, "-f", "json")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["operations"][0]["name"] == "fetchNode"


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


class TestInit:
    def test_creates_config(self, runner: CliRunner, isolated_config: Path) -> None:
        result = _invoke(runner, "init")
        assert result.exit_code == 0, result.output
        assert (isolated_config / CONFIG_FILENAME).is_file()
        assert f"Created {CONFIG_FILENAME}" in result.output

    def test_existing_config(self, runner: CliRunner, isolated_config: Path) -> None:
        (isolated_config / CONFIG_FILENAME).write_text("input: mine.yaml\n", encoding="utf-8")
        result = _invoke(runner, "init")
        assert result.exit_code == 1
        assert "already exists" in result.output

        forced = _invoke(runner, "init", "--force")
        assert forced.exit_code == 0, forced.output
        assert "ir-json" in (isolated_config / CONFIG_FILENAME).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerate:
    def test_generator_option(self, runner: CliRunner, isolated_config: Path) -> None:
        result = _invoke(runner, "generate", "-i", PETSTORE, "-g", "ir-json", "-o", "out")
        assert result.exit_code == 0, result.output
        ir = json.loads((isolated_config / "out" / "ir.json").read_text(encoding="utf-8"))
        assert ir["info"]["title"] == "Petstore API"
        assert (isolated_config / "out" / "modules" / "pets.json").is_file()
        assert "ir-json: wrote 4 file(s)" in result.output

    def test_from_config(self, runner: CliRunner, isolated_config: Path) -> None:
        (isolated_config / CONFIG_FILENAME).write_text(
            textwrap.dedent(f"""\
                input: {PETSTORE}
                generators:
                  ir-json:
                    output: build/ir
                    split_by: operation
                    include_modules: true
            """),
            encoding="utf-8",
        )
        result = _invoke(runner, "generate")
        assert result.exit_code == 0, result.output
        modules = sorted(p.name for p in (isolated_config / "build" / "ir" / "modules").iterdir())
        assert "show_pet_by_id.json" in modules
        assert len(modules) == 6

    def test_nothing_configured(self, runner: CliRunner, isolated_config: Path) -> None:
        result = _invoke(runner, "generate", "-i", PETSTORE)
        assert result.exit_code == 2
        assert "No generators configured" in result.output

    def test_unknown_generator(self, runner: CliRunner, isolated_config: Path) -> None:
        result = _invoke(runner, "generate", "-i", PETSTORE, "-g", "does-not-exist")
        assert result.exit_code == 9
        assert "Unknown generator" in result.output
