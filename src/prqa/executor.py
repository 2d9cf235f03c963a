# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command execution sessions used by the analysis pipeline."""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import TracebackType
from typing import Protocol, runtime_checkable

from .defaults import WORKDIR_PREFIX
from .errors import ExecutionError, LaunchError
from .logging import debug, warn
from .process import CommandOptions, run_command


@runtime_checkable
class Executor(Protocol):
    """Run commands inside the working directory of one analysis session."""

    def execute(self, args: Sequence[str]) -> bytes:
        """Run ``args`` and return the combined stdout/stderr bytes.

        Raises:
            ExecutionError: The process ran and exited with a non-zero status.
            LaunchError: The process could not be started.
        """

        raise NotImplementedError

    def stop(self) -> None:
        """Tear the session down; calling it more than once is harmless."""

        raise NotImplementedError


class FileSystemExecutor:
    """Execute commands as local processes inside a private temporary directory.

    This trusts both the repository being analysed and the configured tools,
    so it should only be used with known-safe inputs. Each instance creates its
    own directory, which makes concurrent sessions safe.
    """

    def __init__(
        self,
        *,
        base_dir: Path | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
        verbose: bool = False,
        use_emoji: bool = True,
        use_color: bool | None = None,
    ) -> None:
        """Create the session and its working directory.

        Args:
            base_dir: Directory below which the working directory is created.
                Defaults to the system temporary directory.
            env: Environment overrides layered on top of ``os.environ``.
            timeout: Optional per-command timeout in seconds.
            verbose: Print every executed command.
            use_emoji: Whether log output may include emoji glyphs.
            use_color: Colour preference for log output; ``None`` follows TTY
                detection.
        """

        if base_dir is not None:
            base_dir.mkdir(parents=True, exist_ok=True)
        self._workdir = Path(tempfile.mkdtemp(prefix=WORKDIR_PREFIX, dir=base_dir))
        self._options = CommandOptions(
            cwd=self._workdir,
            env={**os.environ, **env} if env else None,
            check=False,
            merge_stderr=True,
            text=False,
            timeout=timeout,
        )
        self._verbose = verbose
        self._use_emoji = use_emoji
        self._use_color = use_color
        self._stopped = False

    @property
    def workdir(self) -> Path:
        """Return the session working directory."""

        return self._workdir

    @property
    def stopped(self) -> bool:
        return self._stopped

    def execute(self, args: Sequence[str]) -> bytes:
        if self._stopped:
            raise LaunchError(args, "executor session has been stopped")
        if self._verbose:
            debug(
                f"exec {' '.join(args)} (cwd={self._workdir})",
                use_emoji=self._use_emoji,
                use_color=self._use_color,
            )
        try:
            completed = run_command(args, options=self._options)
        except (OSError, ValueError) as exc:
            raise LaunchError(args, str(exc)) from exc
        output: bytes = completed.stdout or b""
        if completed.returncode != 0:
            raise ExecutionError(args, completed.returncode, output)
        return output

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        try:
            shutil.rmtree(self._workdir)
        except FileNotFoundError:
            return
        except OSError as exc:
            warn(
                f"Could not remove working directory {self._workdir}: {exc}",
                use_emoji=self._use_emoji,
                use_color=self._use_color,
            )

    def __enter__(self) -> FileSystemExecutor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.stop()


__all__ = ["Executor", "FileSystemExecutor"]
