# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Best-effort dependency installation before the analysers run."""

from __future__ import annotations

from collections.abc import Sequence

from .defaults import INSTALL_COMMAND
from .errors import ExecutionError, LaunchError
from .executor import Executor
from .logging import warn


def install_dependencies(
    executor: Executor,
    command: Sequence[str] = INSTALL_COMMAND,
    *,
    use_emoji: bool = True,
    use_color: bool | None = None,
) -> bool:
    """Run the installer step in the working directory.

    Many repositories need no install step, so a missing installer or a failed
    install is reported and otherwise ignored.

    Returns:
        bool: ``True`` when the installer ran and exited successfully.
    """

    try:
        executor.execute(command)
    except LaunchError as exc:
        warn(f"Skipping dependency installation: {exc.reason}", use_emoji=use_emoji, use_color=use_color)
        return False
    except ExecutionError as exc:
        detail = exc.output.decode("utf-8", errors="replace").strip()
        message = f"Dependency installation failed (exit {exc.exit_code})"
        warn(f"{message}\n{detail}" if detail else message, use_emoji=use_emoji, use_color=use_color)
        return False
    return True


__all__ = ["install_dependencies"]
