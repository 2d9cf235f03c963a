# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the prqa package."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventType(str, Enum):
    """Enumerate the repository events prqa knows how to analyse."""

    PULL_REQUEST = "pull_request"
    PUSH = "push"


class AnalysisConfig(BaseModel):
    """Describe the revisions compared by a single run.

    ``event_type`` accepts any string so that unknown event kinds reach the
    orchestrator, which rejects them before issuing any command.
    """

    model_config = ConfigDict(frozen=True)

    event_type: EventType | str = ""
    base_url: str = ""
    base_ref: str = ""
    head_url: str = ""
    head_ref: str = ""

    @field_validator("event_type", mode="before")
    @classmethod
    def _coerce_event_type(cls, value: object) -> object:
        """Return the matching :class:`EventType` when ``value`` names one."""

        if isinstance(value, str) and not isinstance(value, EventType):
            try:
                return EventType(value)
            except ValueError:
                return value
        return value


class Tool(BaseModel):
    """External analyser invocation.

    ``args`` is a whitespace separated template that may contain placeholder
    tokens such as ``%BASE_BRANCH%``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    path: str
    args: str = ""

    @field_validator("name", "path")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class RawIssue(BaseModel):
    """Candidate finding parsed from tool output prior to diff correlation."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int = Field(gt=0)
    column: int | None = None
    message: str


class Issue(BaseModel):
    """Finding located on a changed line, ready to be posted as a review comment.

    ``line`` keeps the new-file line number for annotations that address lines
    directly; it is left out of the serialised form.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    hunk_position: int = Field(gt=0)
    message: str
    line: int | None = Field(default=None, gt=0, exclude=True)


__all__ = ["AnalysisConfig", "EventType", "Issue", "RawIssue", "Tool"]
