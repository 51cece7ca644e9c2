"""Project configuration file (``.specir.yaml``) handling.

The configuration file is looked up in the working directory. It is optional:
:func:`load_config` returns ``None`` when it is absent, and callers fall back
to command-line options and :class:`~specir.models.ProjectConfig` defaults.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so that an interrupted write never leaves a truncated
file behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from specir.exceptions import ConfigError
from specir.models import ProjectConfig

CONFIG_FILENAME = ".specir.yaml"

_DEFAULT_CONFIG = """\
# specir project configuration

# OpenAPI document: local path or http(s) URL
input: openapi.yaml

naming:
  # use_operation_id (falls back to the route when operationId is missing)
  # or use_route_based
  strategy: use_operation_id
  # Rename operations, keyed by operationId or route-derived name
  aliases: {}
    # createChatCompletion: chat

generators:
  ir-json:
    output: generated/ir
    # tag, operation or route
    split_by: tag
    indent: 2
"""


def default_config_path() -> Path:
    return Path.cwd() / CONFIG_FILENAME


def load_config(path: Optional[Path] = None) -> Optional[ProjectConfig]:
    """Load the project configuration.

    Args:
        path: Configuration file. Defaults to ``.specir.yaml`` in the working
            directory.

    Returns:
        The validated configuration, or ``None`` when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does
            not match :class:`~specir.models.ProjectConfig`.
    """
    path = path or default_config_path()
    if not path.is_file():
        return None

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc


def default_config_content() -> str:
    return _DEFAULT_CONFIG


def write_default_config(path: Optional[Path] = None, force: bool = False) -> Path:
    """Write the starter configuration file.

    Raises:
        ConfigError: If the file exists and *force* is not set.
    """
    path = path or default_config_path()
    if path.exists() and not force:
        raise ConfigError(f"{path} already exists. Use --force to overwrite.")
    atomic_write(path, default_config_content())
    return path


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        # Includes KeyboardInterrupt.
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
