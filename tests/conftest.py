"""Shared test fixtures for specir.

Provides the YAML document fixtures (raw and parsed), an isolated working
directory for config tests, output state management, and a CLI runner.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from specir.output import reset_output
from specir.parser.document import OpenApiSpec
from specir.parser.loader import parse_spec

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager keeps references to sys.stdout/sys.stderr taken at
    creation time. Once a CliRunner invocation has finished those streams
    are closed, so a fresh manager must be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures
# ---------------------------------------------------------------------------


def load_fixture(name: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Raw OpenAPI 3.0 petstore document."""
    return load_fixture("petstore.yaml")


@pytest.fixture
def streaming_raw() -> dict[str, Any]:
    """Raw OpenAPI 3.1 document with Server-Sent Events responses."""
    return load_fixture("streaming.yaml")


@pytest.fixture
def composition_raw() -> dict[str, Any]:
    """Raw OpenAPI 3.1 document exercising allOf/oneOf/anyOf and recursion."""
    return load_fixture("composition.yaml")


# ---------------------------------------------------------------------------
# Parsed document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_spec(petstore_raw: dict[str, Any]) -> OpenApiSpec:
    return parse_spec(petstore_raw)


@pytest.fixture
def streaming_spec(streaming_raw: dict[str, Any]) -> OpenApiSpec:
    return parse_spec(streaming_raw)


@pytest.fixture
def composition_spec(composition_raw: dict[str, Any]) -> OpenApiSpec:
    return parse_spec(composition_raw)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside tmp_path so no real ``.specir.yaml`` is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
