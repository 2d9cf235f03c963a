# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for settings defaults and TOML loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from prqa.config import Settings, build_settings, load_settings
from prqa.defaults import DEFAULT_TOOLS
from prqa.diff import HunkNumbering
from prqa.errors import ConfigError
from prqa.models import Tool


def test_defaults() -> None:
    settings = load_settings(None)

    assert settings == Settings()
    assert settings.tools == DEFAULT_TOOLS
    assert settings.install_command == ("install-deps.sh",)
    assert settings.generated_command == "isFileGenerated"
    assert settings.numbering is HunkNumbering.HUNK
    assert settings.output.emoji is True


def test_dedicated_file_with_env_expansion(tmp_path: Path) -> None:
    path = tmp_path / "prqa.toml"
    path.write_text(
        """
install_command = "make deps"
numbering = "file"
timeout = 30

[env]
GOPATH = "${HOME}/go"

[output]
emoji = false

[[tools]]
name = "vet"
path = "go"
args = "vet ./..."

[[tools]]
name = "apicompat"
path = "$BIN/apicompat"
args = "-before %BASE_BRANCH% ./..."
""",
        encoding="utf-8",
    )

    settings = load_settings(path, env={"HOME": "/home/ci", "BIN": "/opt/bin"})

    assert settings.install_command == ("make", "deps")
    assert settings.numbering is HunkNumbering.FILE
    assert settings.timeout == 30
    assert settings.env == {"GOPATH": "/home/ci/go"}
    assert settings.output.emoji is False
    assert settings.tools == (
        Tool(name="vet", path="go", args="vet ./..."),
        Tool(name="apicompat", path="/opt/bin/apicompat", args="-before %BASE_BRANCH% ./..."),
    )


def test_pyproject_section(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text(
        """
[project]
name = "demo"

[tool.prqa]
generated_command = "is-generated"
tools = [{ name = "lint", path = "golint" }]
""",
        encoding="utf-8",
    )

    settings = load_settings(path, env={})

    assert settings.generated_command == "is-generated"
    assert settings.tools == (Tool(name="lint", path="golint"),)


def test_pyproject_without_section_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "demo"\n', encoding="utf-8")

    assert load_settings(path, env={}) == Settings()


@pytest.mark.parametrize(
    "payload",
    [
        {"unknown": 1},
        {"tools": [{"name": "x"}]},
        {"tools": [{"name": "x", "path": "y", "flags": "-v"}]},
        {"install_command": ""},
        {"numbering": "sideways"},
        {"timeout": -1},
    ],
)
def test_invalid_settings_raise_config_error(payload: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        build_settings(payload)


def test_missing_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_settings(tmp_path / "absent.toml")

    broken = tmp_path / "broken.toml"
    broken.write_text("tools = [", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid TOML"):
        load_settings(broken)
