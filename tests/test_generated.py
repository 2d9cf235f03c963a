# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for generated-file filtering and the install step."""

from __future__ import annotations

import pytest

from prqa.errors import DetectorLaunchError
from prqa.generated import filter_generated, is_generated
from prqa.installer import install_dependencies
from prqa.models import Issue
from tests.helpers.executor import ScriptedExecutor, step


def test_exit_status_encodes_the_answer() -> None:
    executor = ScriptedExecutor.of(
        step("isFileGenerated", "/w", "a.pb.go"),
        step("isFileGenerated", "/w", "a.go", exit_code=1),
    )

    assert is_generated(executor, "/w", "a.pb.go") is True
    assert is_generated(executor, "/w", "a.go") is False


def test_filter_generated_keeps_order_and_custom_command() -> None:
    issues = [
        Issue(file="a.go", hunk_position=1, message="t: one"),
        Issue(file="z_gen.go", hunk_position=4, message="t: two"),
        Issue(file="a.go", hunk_position=2, message="t: three"),
    ]
    executor = ScriptedExecutor.of(
        step("detect", "/w", "a.go", exit_code=1),
        step("detect", "/w", "z_gen.go"),
        step("detect", "/w", "a.go", exit_code=1),
    )

    assert filter_generated(executor, "/w", issues, command="detect") == [issues[0], issues[2]]


def test_detector_launch_failure_propagates() -> None:
    executor = ScriptedExecutor.of(step("isFileGenerated", "/w", "a.go", launch_error="missing"))

    with pytest.raises(DetectorLaunchError):
        is_generated(executor, "/w", "a.go")


def test_install_dependencies_reports_outcome() -> None:
    executor = ScriptedExecutor.of(
        step("install-deps.sh"),
        step("install-deps.sh", output="boom", exit_code=2),
        step("install-deps.sh", launch_error="not found"),
        step("make", "deps"),
    )

    assert install_dependencies(executor, use_emoji=False) is True
    assert install_dependencies(executor, use_emoji=False) is False
    assert install_dependencies(executor, use_emoji=False) is False
    assert install_dependencies(executor, ("make", "deps"), use_emoji=False) is True
