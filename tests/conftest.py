# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from prqa.console import get_console_manager


@pytest.fixture(autouse=True)
def _fresh_consoles() -> Iterator[None]:
    """Drop cached Rich consoles so captured streams are picked up per test."""

    get_console_manager().clear()
    yield
    get_console_manager().clear()
