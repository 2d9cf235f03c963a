# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for tool argument expansion and execution."""

from __future__ import annotations

import pytest

from prqa.errors import ToolLaunchError
from prqa.models import Tool
from prqa.tools import BASE_BRANCH_TOKEN, build_command, expand_arguments, run_tool
from tests.helpers.executor import ScriptedExecutor, step


def test_expand_arguments_substitutes_base_branch() -> None:
    assert expand_arguments("-before %BASE_BRANCH%   ./...", "FETCH_HEAD") == ["-before", "FETCH_HEAD", "./..."]


def test_expand_arguments_replaces_embedded_tokens_and_keeps_unknown_ones() -> None:
    assert expand_arguments(f"--since={BASE_BRANCH_TOKEN} %HEAD%", "main") == ["--since=main", "%HEAD%"]


def test_expand_empty_template() -> None:
    assert expand_arguments("", "main") == []
    assert build_command(Tool(name="vet", path="go-vet"), "main") == ["go-vet"]


def test_non_zero_exit_output_is_returned() -> None:
    executor = ScriptedExecutor.of(step("golint", "./...", output="a.go:1: lint", exit_code=1))

    assert run_tool(executor, Tool(name="golint", path="golint", args="./..."), "main") == b"a.go:1: lint"


def test_launch_failure_raises_tool_launch_error() -> None:
    executor = ScriptedExecutor.of(step("nope", launch_error="permission denied"))

    with pytest.raises(ToolLaunchError, match="permission denied") as excinfo:
        run_tool(executor, Tool(name="Nope", path="nope"), "main")
    assert excinfo.value.tool == "Nope"


def test_tool_requires_name_and_path() -> None:
    with pytest.raises(ValueError):
        Tool(name=" ", path="x")
