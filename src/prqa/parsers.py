# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Extract candidate findings from the plain-text output of analysis tools."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from typing import Final

from .models import RawIssue

ISSUE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<file>[^:\s][^:]*):(?P<line>\d+)(?::(?P<column>\d+))?: (?P<message>.*)$",
)
_PATH_SEPARATOR: Final[str] = "/"


def _ensure_lines(value: bytes | str | Sequence[str]) -> list[str]:
    """Normalise raw tool output into a list of lines."""

    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value.splitlines()
    return [str(item) for item in value]


def relativize(path: str, root: str | None) -> str:
    """Strip ``root`` from an absolute ``path``.

    Paths outside ``root`` are returned unchanged and will simply not match
    any file in the diff.
    """

    if not root or not path.startswith(_PATH_SEPARATOR):
        return path
    prefix = root.rstrip(_PATH_SEPARATOR) + _PATH_SEPARATOR
    if path.startswith(prefix):
        return path[len(prefix) :]
    return path


def iter_pattern_matches(lines: Sequence[str], pattern: re.Pattern[str]) -> Iterator[re.Match[str]]:
    """Yield matches of ``pattern`` against ``lines``, ignoring the rest."""

    for raw_line in lines:
        match = pattern.match(raw_line.rstrip("\r"))
        if match:
            yield match


def parse_tool_output(output: bytes | str | Sequence[str], *, root: str | None = None) -> list[RawIssue]:
    """Parse ``<path>:<line>[:<column>]: <message>`` lines from tool output.

    Args:
        output: Combined stdout/stderr captured from the tool.
        root: Absolute working directory; absolute paths below it are made
            relative to it.

    Returns:
        list[RawIssue]: Candidates in the order they were printed.
    """

    results: list[RawIssue] = []
    for match in iter_pattern_matches(_ensure_lines(output), ISSUE_PATTERN):
        line = int(match.group("line"))
        if line <= 0:
            continue
        column = match.group("column")
        results.append(
            RawIssue(
                file=relativize(match.group("file"), root),
                line=line,
                column=int(column) if column is not None else None,
                message=match.group("message"),
            ),
        )
    return results


__all__ = ["ISSUE_PATTERN", "iter_pattern_matches", "parse_tool_output", "relativize"]
