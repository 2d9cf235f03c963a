# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for console selection and the logging helpers."""

from __future__ import annotations

import io
import sys

import pytest

from prqa.console import detect_tty
from prqa.logging import info, warn


class _Terminal(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_tty_detection_follows_stderr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "stdout", _Terminal())
    monkeypatch.setattr(sys, "stderr", io.StringIO())
    assert detect_tty() is False

    monkeypatch.setattr(sys, "stdout", io.StringIO())
    monkeypatch.setattr(sys, "stderr", _Terminal())
    assert detect_tty() is True


def test_logs_go_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    info("cloning", use_emoji=False, use_color=False)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == "cloning"


def test_disabled_colour_suppresses_escapes_on_a_terminal(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr("prqa.console.detect_tty", lambda: True)

    warn("careful", use_emoji=False, use_color=False)

    err = capsys.readouterr().err
    assert "careful" in err
    assert "\x1b[" not in err
