# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and TOML loading for prqa."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .defaults import DEFAULT_TOOLS, GENERATED_COMMAND, INSTALL_COMMAND
from .diff import HunkNumbering
from .errors import ConfigError
from .models import Tool

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "prqa"
_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class OutputSettings(BaseModel):
    """Console presentation preferences."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    emoji: bool = True
    color: bool = True
    verbose: bool = False


class Settings(BaseModel):
    """Everything a run needs besides the event description."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tools: tuple[Tool, ...] = Field(default=DEFAULT_TOOLS)
    install_command: tuple[str, ...] = INSTALL_COMMAND
    generated_command: str = GENERATED_COMMAND
    workspace_dir: Path | None = None
    timeout: float | None = Field(default=None, ge=0)
    env: dict[str, str] = Field(default_factory=dict)
    numbering: HunkNumbering = HunkNumbering.HUNK
    output: OutputSettings = Field(default_factory=OutputSettings)

    @field_validator("install_command", mode="before")
    @classmethod
    def _split_install_command(cls, value: object) -> object:
        """Accept the installer as a single string or as an argument list."""

        if isinstance(value, str):
            return tuple(value.split())
        return value

    @field_validator("install_command")
    @classmethod
    def _require_install_command(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("install_command must name an executable")
        return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _expand_env(value: Any, env: Mapping[str, str]) -> Any:
    """Expand ``$VAR`` and ``${VAR}`` references inside strings of ``value``."""

    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {key: _expand_env(entry, env) for key, entry in value.items()}
    if isinstance(value, list):
        return [_expand_env(entry, env) for entry in value]
    return value


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file {path} does not exist") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Configuration file {path} is not valid TOML: {exc}") from exc


def _select_section(path: Path, document: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return ``[tool.prqa]`` for ``pyproject.toml`` and the whole document otherwise."""

    if path.name != PYPROJECT_FILENAME:
        return document
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return section


def build_settings(data: Mapping[str, Any], *, source: str = "<settings>") -> Settings:
    """Validate ``data`` into :class:`Settings`.

    Raises:
        ConfigError: If the data does not describe valid settings.
    """

    try:
        return Settings.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source}: {exc}") from exc


def load_settings(path: Path | None = None, *, env: Mapping[str, str] | None = None) -> Settings:
    """Load settings from a TOML file, or return the defaults when ``path`` is ``None``.

    ``pyproject.toml`` files are read from their ``[tool.prqa]`` table; any
    other file is read as a whole. String values may reference environment
    variables as ``$VAR`` or ``${VAR}``.

    Args:
        path: Configuration file to read.
        env: Environment used for variable expansion; defaults to ``os.environ``.

    Returns:
        Settings: Validated settings.

    Raises:
        ConfigError: If the file is missing, malformed or invalid.
    """

    if path is None:
        return Settings()
    section = _select_section(path, _read_toml(path))
    expanded = _expand_env(section, os.environ if env is None else env)
    return build_settings(expanded, source=str(path))


__all__ = ["OutputSettings", "Settings", "build_settings", "load_settings"]
