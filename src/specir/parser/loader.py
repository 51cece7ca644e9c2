"""Load OpenAPI documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw OpenAPI documents and turning
them into :class:`~specir.parser.document.OpenApiSpec` models. It supports
both JSON and YAML with automatic format detection, and rejects anything that
is not an OpenAPI 3.x document before model validation starts.

Public functions:

* :func:`load_spec` -- Load a raw mapping from any supported source.
* :func:`validate_openapi_version` -- Check and return the ``openapi`` version.
* :func:`parse_spec` -- Validate a raw mapping into an :class:`OpenApiSpec`.
* :func:`from_yaml` / :func:`from_json` -- Parse document text directly.
* :func:`load_document` -- :func:`load_spec` followed by :func:`parse_spec`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from specir.exceptions import SpecParseError
from specir.parser.document import OpenApiSpec


_URL_PREFIXES = ("http://", "https://")
_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read, is empty, or cannot be
            parsed.
    """
    if source == "-":
        text, hint, label = _read_stdin(), "", "stdin"
    elif source.startswith(_URL_PREFIXES):
        text, hint = _fetch(source)
        label = source
    else:
        text, hint = _read_file(Path(source))
        label = source

    if not text.strip():
        raise SpecParseError(f"No input received from {label}")
    return _parse_content(text, hint=hint)


def _read_stdin() -> str:
    try:
        return sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc


def _fetch(url: str) -> tuple[str, str]:
    """GET *url*; the response content type doubles as the format hint."""
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} while fetching {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch {url}: {exc}") from exc

    media = response.headers.get("content-type", "").lower()
    if "json" in media:
        return response.text, "json"
    if "yaml" in media or "yml" in media:
        return response.text, "yaml"
    return response.text, ""


def _read_file(path: Path) -> tuple[str, str]:
    if not path.is_file():
        raise SpecParseError(f"Document not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        raise SpecParseError(f"Document is empty: {path}")
    return text, _SUFFIX_HINTS.get(path.suffix.lower(), "")


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Decode *content* into a mapping.

    JSON is attempted first unless *hint* is ``"yaml"``; YAML is the fallback
    except under a ``"json"`` hint, where a JSON error is final.

    Raises:
        SpecParseError: If neither format decodes the content, or the result
            is not a mapping.
    """
    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            json_error = exc
    else:
        json_error = None

    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        detail = f"YAML: {exc}"
        if json_error is not None:
            detail = f"JSON: {json_error}\n  {detail}"
        raise SpecParseError(f"Document is neither JSON nor YAML\n  {detail}") from exc
    return _require_mapping(document)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        got = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {got})")
    return result


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Validate and return the OpenAPI version string.

    Any ``3.x`` version is accepted. Swagger 2.x documents, documents without
    an ``openapi`` field, and other versions are rejected.

    Args:
        spec: The raw document dictionary.

    Returns:
        The OpenAPI version string (e.g., ``'3.0.3'``, ``'3.1.0'``).

    Raises:
        SpecParseError: If the version is missing, unsupported, or indicates
            Swagger 2.x.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Only OpenAPI 3.x documents are supported. "
            "Consider converting with https://converter.swagger.io"
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise SpecParseError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(openapi_version)
    if not version_str.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version_str}. "
            "Only OpenAPI 3.x documents are supported."
        )
    return version_str


def parse_spec(raw: dict[str, Any]) -> OpenApiSpec:
    """Validate a raw document mapping into an :class:`OpenApiSpec`.

    Raises:
        SpecParseError: If the version is unsupported or the document does
            not match the OpenAPI object model.
    """
    validate_openapi_version(raw)
    try:
        return OpenApiSpec.model_validate(raw)
    except ValidationError as exc:
        raise SpecParseError(f"Invalid OpenAPI document: {exc}") from exc


def from_yaml(text: str) -> OpenApiSpec:
    return parse_spec(_parse_content(text, hint="yaml"))


def from_json(text: str) -> OpenApiSpec:
    return parse_spec(_parse_content(text, hint="json"))


def load_document(source: str) -> OpenApiSpec:
    """Load *source* (see :func:`load_spec`) and parse it into an :class:`OpenApiSpec`."""
    return parse_spec(load_spec(source))
