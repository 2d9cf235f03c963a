# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drop issues located in machine-generated files."""

from __future__ import annotations

from collections.abc import Iterable

from .defaults import GENERATED_COMMAND
from .errors import DetectorLaunchError, ExecutionError, LaunchError
from .executor import Executor
from .models import Issue


def is_generated(executor: Executor, root: str, file: str, *, command: str = GENERATED_COMMAND) -> bool:
    """Ask the detector whether ``file`` below ``root`` is machine-generated.

    The detector answers through its exit status: zero means generated, any
    other status means hand written.

    Raises:
        DetectorLaunchError: If the detector could not be started.
    """

    args = (command, root, file)
    try:
        executor.execute(args)
    except ExecutionError:
        return False
    except LaunchError as exc:
        raise DetectorLaunchError(args, exc) from exc
    return True


def filter_generated(
    executor: Executor,
    root: str,
    issues: Iterable[Issue],
    *,
    command: str = GENERATED_COMMAND,
) -> list[Issue]:
    """Return ``issues`` without those in generated files, preserving order.

    Every issue triggers its own detector call, even when several issues share
    a file.
    """

    return [issue for issue in issues if not is_generated(executor, root, issue.file, command=command)]


__all__ = ["filter_generated", "is_generated"]
