# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render analysis issues for terminals, machines and CI annotations."""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum
from typing import Final

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import Issue

_GITHUB_ESCAPES: Final[dict[str, str]] = {"%": "%25", "\r": "%0D", "\n": "%0A"}
_GITHUB_PROPERTY_ESCAPES: Final[dict[str, str]] = {**_GITHUB_ESCAPES, ":": "%3A", ",": "%2C"}


class OutputFormat(str, Enum):
    """Enumerate the supported report formats."""

    TEXT = "text"
    JSON = "json"
    GITHUB = "github"


def _escape(value: str, table: dict[str, str]) -> str:
    return "".join(table.get(char, char) for char in value)


def issues_to_json(issues: Sequence[Issue]) -> str:
    """Serialise ``issues`` as a JSON array."""

    return json.dumps([issue.model_dump() for issue in issues], indent=2)


def _github_annotation(issue: Issue) -> str:
    properties = f"file={_escape(issue.file, _GITHUB_PROPERTY_ESCAPES)}"
    if issue.line is not None:
        properties += f",line={issue.line}"
    return f"::warning {properties}::{_escape(issue.message, _GITHUB_ESCAPES)}"


def issues_to_github(issues: Sequence[Issue]) -> str:
    """Render ``issues`` as GitHub Actions ``::warning`` workflow commands.

    Annotations address the file line, not the hunk position; issues without a
    known line are attached to the file as a whole.
    """

    return "\n".join(_github_annotation(issue) for issue in issues)


def issues_table(issues: Sequence[Issue]) -> Table:
    """Return a Rich table listing ``issues``."""

    table = Table(box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("File", style="cyan")
    table.add_column("Position", justify="right")
    table.add_column("Message")
    for issue in issues:
        table.add_row(Text(issue.file), str(issue.hunk_position), Text(issue.message))
    return table


def render_issues(issues: Sequence[Issue], fmt: OutputFormat, *, console: Console) -> None:
    """Write ``issues`` to ``console`` in the requested format."""

    if fmt is OutputFormat.JSON:
        console.print(issues_to_json(issues), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return
    if fmt is OutputFormat.GITHUB:
        if issues:
            console.print(issues_to_github(issues), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return
    if not issues:
        console.print("No issues on changed lines.")
        return
    console.print(issues_table(issues))


__all__ = ["OutputFormat", "issues_table", "issues_to_github", "issues_to_json", "render_issues"]
