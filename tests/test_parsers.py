# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the plain-text tool output parser."""

from __future__ import annotations

import pytest

from prqa.models import RawIssue
from prqa.parsers import parse_tool_output, relativize


def test_parses_relative_and_absolute_paths() -> None:
    output = b"""# example.com/pkg
main.go:12: result of fmt.Sprintln call not used
/work/prqa-1/pkg/util.go:3:7: exported function Foo should have comment
exit status 1
"""
    assert parse_tool_output(output, root="/work/prqa-1") == [
        RawIssue(file="main.go", line=12, message="result of fmt.Sprintln call not used"),
        RawIssue(file="pkg/util.go", line=3, column=7, message="exported function Foo should have comment"),
    ]


def test_message_keeps_later_separators() -> None:
    (issue,) = parse_tool_output("a.go:1: composite literal uses unkeyed fields: x: y")

    assert issue.message == "composite literal uses unkeyed fields: x: y"


@pytest.mark.parametrize(
    "line",
    [
        "",
        "main.go: no line number",
        "main.go:0: zero is not a line",
        "main.go:abc: not numeric",
        "  main.go:1: indented",
        "main.go:1:missing space",
    ],
)
def test_ignores_non_matching_lines(line: str) -> None:
    assert parse_tool_output(line) == []


def test_invalid_utf8_is_tolerated() -> None:
    (issue,) = parse_tool_output(b"x.go:2: bad byte \xff here\r\n")

    assert issue.file == "x.go"
    assert issue.message.startswith("bad byte ")
    assert not issue.message.endswith("\r")


def test_relativize() -> None:
    assert relativize("/root/dir/a.go", "/root/dir") == "a.go"
    assert relativize("/root/dir/a.go", "/root/dir/") == "a.go"
    assert relativize("/root/dirty/a.go", "/root/dir") == "/root/dirty/a.go"
    assert relativize("/elsewhere/a.go", "/root/dir") == "/elsewhere/a.go"
    assert relativize("a.go", "/root/dir") == "a.go"
    assert relativize("/root/dir/a.go", None) == "/root/dir/a.go"
