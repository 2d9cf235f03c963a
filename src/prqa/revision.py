# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Check out the revisions of an event and compute the diff between them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from .errors import ExecutionError, LaunchError, RevisionError, UnsupportedEventError
from .executor import Executor
from .models import AnalysisConfig, EventType

FETCH_HEAD: Final[str] = "FETCH_HEAD"
CHECKOUT_DIR: Final[str] = "."


@dataclass(slots=True, frozen=True)
class RevisionPlan:
    """Git commands for one event, plus the ref tools should compare against."""

    commands: tuple[tuple[str, ...], ...]
    base_ref: str


@dataclass(slots=True, frozen=True)
class PreparedRevisions:
    """Result of preparing the checkout."""

    diff: bytes
    base_ref: str


def plan_revisions(config: AnalysisConfig) -> RevisionPlan:
    """Return the git command sequence for ``config``; the last command is the diff.

    Raises:
        UnsupportedEventError: If the event type is not recognised.
    """

    if config.event_type == EventType.PULL_REQUEST:
        return RevisionPlan(
            commands=(
                (
                    "git",
                    "clone",
                    "--depth",
                    "1",
                    "--branch",
                    config.head_ref,
                    "--single-branch",
                    config.head_url,
                    CHECKOUT_DIR,
                ),
                ("git", "fetch", "--depth", "1", config.base_url, config.base_ref),
                ("git", "diff", f"{FETCH_HEAD}...{config.head_ref}"),
            ),
            base_ref=FETCH_HEAD,
        )
    if config.event_type == EventType.PUSH:
        return RevisionPlan(
            commands=(
                ("git", "clone", config.head_url, CHECKOUT_DIR),
                ("git", "checkout", config.head_ref),
                ("git", "diff", f"{config.base_ref}...{config.head_ref}"),
            ),
            base_ref=config.base_ref,
        )
    raise UnsupportedEventError(config.event_type)


def _run(executor: Executor, command: Sequence[str]) -> bytes:
    try:
        return executor.execute(command)
    except (ExecutionError, LaunchError) as exc:
        raise RevisionError(command, exc) from exc


def prepare_revisions(executor: Executor, config: AnalysisConfig) -> PreparedRevisions:
    """Clone the head revision into the working directory and diff it against the base.

    Args:
        executor: Session whose working directory receives the checkout.
        config: Event description.

    Returns:
        PreparedRevisions: Raw diff bytes and the dynamic base ref.

    Raises:
        UnsupportedEventError: If the event type is not recognised; no command runs.
        RevisionError: If any git command fails.
    """

    plan = plan_revisions(config)
    *setup, diff_command = plan.commands
    for command in setup:
        _run(executor, command)
    return PreparedRevisions(diff=_run(executor, diff_command), base_ref=plan.base_ref)


__all__ = ["FETCH_HEAD", "PreparedRevisions", "RevisionPlan", "plan_revisions", "prepare_revisions"]
