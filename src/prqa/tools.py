# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expand tool argument templates and run the configured analysers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from .errors import ExecutionError, LaunchError, ToolLaunchError
from .executor import Executor
from .models import Tool

BASE_BRANCH_TOKEN: Final[str] = "%BASE_BRANCH%"


def placeholder_values(base_ref: str) -> Mapping[str, str]:
    """Return the recognised placeholder tokens mapped to their run values."""

    return {BASE_BRANCH_TOKEN: base_ref}


def expand_arguments(template: str, base_ref: str) -> list[str]:
    """Split ``template`` on whitespace and substitute the recognised tokens.

    Substitution is literal, so a token embedded in a larger argument such as
    ``--since=%BASE_BRANCH%`` is replaced too. Unknown ``%...%`` tokens are left
    untouched.
    """

    values = placeholder_values(base_ref)
    arguments: list[str] = []
    for argument in template.split():
        for token, value in values.items():
            argument = argument.replace(token, value)
        arguments.append(argument)
    return arguments


def build_command(tool: Tool, base_ref: str) -> list[str]:
    """Return the full command line for ``tool``."""

    return [tool.path, *expand_arguments(tool.args, base_ref)]


def run_tool(executor: Executor, tool: Tool, base_ref: str) -> bytes:
    """Run ``tool`` and return its combined output.

    Analysers commonly exit non-zero to signal that they found something, so
    a non-zero exit is not an error and its output is returned.

    Raises:
        ToolLaunchError: If the tool could not be started.
    """

    try:
        return executor.execute(build_command(tool, base_ref))
    except ExecutionError as exc:
        return exc.output
    except LaunchError as exc:
        raise ToolLaunchError(tool.name, exc) from exc


__all__ = ["BASE_BRANCH_TOKEN", "build_command", "expand_arguments", "placeholder_values", "run_tool"]
