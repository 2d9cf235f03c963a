# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in defaults used when no configuration file overrides them."""

from __future__ import annotations

from typing import Final

from .models import Tool

INSTALL_COMMAND: Final[tuple[str, ...]] = ("install-deps.sh",)
GENERATED_COMMAND: Final[str] = "isFileGenerated"
PWD_COMMAND: Final[tuple[str, ...]] = ("pwd",)
WORKDIR_PREFIX: Final[str] = "prqa-"

DEFAULT_TOOLS: Final[tuple[Tool, ...]] = (
    Tool(name="go vet", path="go", args="vet ./..."),
    Tool(name="golint", path="golint", args="./..."),
    Tool(name="apicompat", path="apicompat", args="-before %BASE_BRANCH% ./..."),
    Tool(name="staticcheck", path="staticcheck", args="./..."),
)

__all__ = [
    "DEFAULT_TOOLS",
    "GENERATED_COMMAND",
    "INSTALL_COMMAND",
    "PWD_COMMAND",
    "WORKDIR_PREFIX",
]
