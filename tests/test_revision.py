# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for checkout preparation."""

from __future__ import annotations

import pytest

from prqa.errors import ExecutionError, RevisionError, UnsupportedEventError
from prqa.models import AnalysisConfig, EventType
from prqa.revision import FETCH_HEAD, plan_revisions, prepare_revisions
from tests.helpers.executor import ScriptedExecutor, step


def _config(event: str) -> AnalysisConfig:
    return AnalysisConfig(event_type=event, base_url="b-url", base_ref="main", head_url="h-url", head_ref="feature")


def test_event_type_strings_are_coerced() -> None:
    assert _config("pull_request").event_type is EventType.PULL_REQUEST
    assert _config("push").event_type is EventType.PUSH
    assert _config("tag").event_type == "tag"


def test_pull_request_plan_compares_against_fetch_head() -> None:
    plan = plan_revisions(_config("pull_request"))

    assert plan.base_ref == FETCH_HEAD
    assert plan.commands[-1] == ("git", "diff", "FETCH_HEAD...feature")


def test_push_plan_compares_against_base_ref() -> None:
    plan = plan_revisions(_config("push"))

    assert plan.base_ref == "main"
    assert plan.commands == (
        ("git", "clone", "h-url", "."),
        ("git", "checkout", "feature"),
        ("git", "diff", "main...feature"),
    )


def test_unsupported_event_issues_no_command() -> None:
    executor = ScriptedExecutor.of()

    with pytest.raises(UnsupportedEventError):
        prepare_revisions(executor, _config("release"))
    assert executor.executed == []


def test_prepare_returns_diff_bytes() -> None:
    executor = ScriptedExecutor.of(
        step("git", "clone", "h-url", "."),
        step("git", "checkout", "feature"),
        step("git", "diff", "main...feature", output=b"diff --git a/x b/x\n"),
    )

    prepared = prepare_revisions(executor, _config("push"))

    assert prepared.diff == b"diff --git a/x b/x\n"
    assert prepared.base_ref == "main"


def test_fetch_failure_stops_preparation() -> None:
    executor = ScriptedExecutor.of(
        step("git", "clone", "--depth", "1", "--branch", "feature", "--single-branch", "h-url", "."),
        step("git", "fetch", "--depth", "1", "b-url", "main", output="fatal: couldn't find remote ref", exit_code=128),
    )

    with pytest.raises(RevisionError) as excinfo:
        prepare_revisions(executor, _config("pull_request"))

    assert isinstance(excinfo.value.cause, ExecutionError)
    assert excinfo.value.cause.exit_code == 128
    assert executor.exhausted
