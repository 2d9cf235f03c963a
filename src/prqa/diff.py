# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Unified diff indexing and correlation of findings with changed lines.

A :class:`DiffIndex` is built once per run from the raw ``git diff`` output and
maps every file touched by the diff to the line numbers it adds, each paired
with the review-comment position of that line. :func:`correlate` then keeps
only the findings that land on one of those lines.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final

from .models import Issue, RawIssue

_FILE_HEADER: Final[str] = "+++ "
_HUNK_HEADER: Final[re.Pattern[str]] = re.compile(r"^@@ -\d+(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_DEV_NULL: Final[str] = "/dev/null"
_NEW_FILE_PREFIX: Final[str] = "b/"
_NO_NEWLINE_MARKER: Final[str] = "\\"


class HunkNumbering(str, Enum):
    """Enumerate the supported conventions for numbering lines within a diff.

    ``HUNK`` restarts at 1 after every hunk header and counts context and
    added lines. ``FILE`` keeps counting from the first hunk header of a file
    and includes removed lines and later hunk headers, which is how GitHub
    positions pull request review comments.
    """

    HUNK = "hunk"
    FILE = "file"


@dataclass(slots=True, frozen=True)
class ChangedLine:
    """Added line of a file together with its position in the diff."""

    line: int
    position: int


@dataclass(slots=True)
class _ParserState:
    """Cursor state while walking the diff line by line."""

    numbering: HunkNumbering
    file: str | None = None
    line: int = 0
    position: int = 0
    seen_hunk: bool = False
    old_remaining: int = 0
    new_remaining: int = 0

    @property
    def in_hunk(self) -> bool:
        return self.old_remaining > 0 or self.new_remaining > 0

    def start_file(self, path: str | None) -> None:
        self.file = path
        self.seen_hunk = False
        self.old_remaining = self.new_remaining = 0

    def start_hunk(self, match: re.Match[str]) -> None:
        old_count, new_start, new_count = match.groups()
        self.line = int(new_start)
        self.old_remaining = 1 if old_count is None else int(old_count)
        self.new_remaining = 1 if new_count is None else int(new_count)
        if self.numbering is HunkNumbering.HUNK or not self.seen_hunk:
            self.position = 0
        else:
            self.position += 1
        self.seen_hunk = True


def _decode(diff: bytes | str) -> str:
    return diff if isinstance(diff, str) else diff.decode("utf-8", errors="replace")


def _parse_file_header(raw_line: str) -> str | None:
    """Return the new-side path named by a ``+++`` header, ``None`` for deletions."""

    path = raw_line[len(_FILE_HEADER) :].split("\t", 1)[0].rstrip()
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        path = path[1:-1]
    if path == _DEV_NULL:
        return None
    if path.startswith(_NEW_FILE_PREFIX):
        path = path[len(_NEW_FILE_PREFIX) :]
    return path or None


@dataclass(slots=True, frozen=True)
class DiffIndex:
    """Per-file lookup table of added line numbers and their positions."""

    _files: Mapping[str, Mapping[int, int]] = field(default_factory=dict)

    @classmethod
    def parse(cls, diff: bytes | str, *, numbering: HunkNumbering = HunkNumbering.HUNK) -> DiffIndex:
        """Build an index from unified diff text.

        Hunk bodies are consumed using the line counts from their headers, so
        removed lines that happen to look like ``+++`` headers are not
        mistaken for the start of a new file. A line that cannot belong to a
        hunk body ends the hunk early, which tolerates truncated diffs.

        Args:
            diff: Raw unified diff, typically the output of ``git diff``.
            numbering: Position convention to apply.

        Returns:
            DiffIndex: Lookup table keyed by checkout-relative file path.
        """

        files: dict[str, dict[int, int]] = {}
        state = _ParserState(numbering=numbering)
        for raw_line in _decode(diff).split("\n"):
            line = raw_line.rstrip("\r")
            if state.in_hunk and cls._consume_body_line(line, state, files):
                continue
            state.old_remaining = state.new_remaining = 0
            if line.startswith(_FILE_HEADER):
                state.start_file(_parse_file_header(line))
                continue
            match = _HUNK_HEADER.match(line)
            if match and state.file is not None:
                state.start_hunk(match)
        return cls(_files={path: MappingProxyType(lines) for path, lines in files.items()})

    @staticmethod
    def _consume_body_line(line: str, state: _ParserState, files: dict[str, dict[int, int]]) -> bool:
        """Apply one hunk body line to ``state``; return ``False`` if it is not one."""

        marker = line[:1]
        if marker == _NO_NEWLINE_MARKER:
            return True
        if marker == "-":
            state.old_remaining -= 1
            if state.numbering is HunkNumbering.FILE:
                state.position += 1
            return True
        if marker == "+":
            state.new_remaining -= 1
            state.position += 1
            if state.file is not None:
                files.setdefault(state.file, {})[state.line] = state.position
            state.line += 1
            return True
        if marker in {" ", ""}:
            # Some tools strip the single space from blank context lines.
            state.old_remaining -= 1
            state.new_remaining -= 1
            state.position += 1
            state.line += 1
            return True
        return False

    @property
    def files(self) -> tuple[str, ...]:
        """Return the files with at least one added line, in diff order."""

        return tuple(self._files)

    def changed_lines(self, file: str) -> tuple[ChangedLine, ...]:
        """Return the added lines of ``file`` in diff order."""

        return tuple(ChangedLine(line, position) for line, position in self._files.get(file, {}).items())

    def position(self, file: str, line: int) -> int | None:
        """Return the diff position of ``line`` in ``file`` or ``None`` when unchanged."""

        lines = self._files.get(file)
        if lines is None:
            return None
        return lines.get(line)

    def __contains__(self, file: object) -> bool:
        return file in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)


def correlate(candidates: Iterable[RawIssue], index: DiffIndex, tool_name: str) -> list[Issue]:
    """Keep the candidates that fall on changed lines and convert them to issues.

    Args:
        candidates: Findings parsed from a tool's output, in output order.
        index: Changed-line index for the current run.
        tool_name: Display name prefixed to every message.

    Returns:
        list[Issue]: Issues in the order their candidates were supplied.
    """

    issues: list[Issue] = []
    for candidate in candidates:
        position = index.position(candidate.file, candidate.line)
        if position is None:
            continue
        issues.append(
            Issue(
                file=candidate.file,
                hunk_position=position,
                message=f"{tool_name}: {candidate.message}",
                line=candidate.line,
            ),
        )
    return issues


__all__ = ["ChangedLine", "DiffIndex", "HunkNumbering", "correlate"]
