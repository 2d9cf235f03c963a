# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; commands are passed as argument
# lists and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_EXIT_CODE: Final[int] = 124


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = False
    merge_stderr: bool = False
    text: bool = True
    timeout: float | None = None

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout < 0:
            raise ValueError("timeout must be non-negative")


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | bytes | None,
        stderr: str | bytes | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """

        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {_ensure_text(stderr) or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _ensure_text(value: str | bytes | None) -> str | None:
    """Return ``value`` decoded to text when supplied as ``bytes``."""

    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="replace")


def _normalize_args(
    args: Sequence[str],
    cwd: Path | None,
    env: Mapping[str, str] | None = None,
) -> list[str]:
    """Resolve the executable of ``args`` to an absolute path.

    Executables given as a path containing a separator are resolved against
    ``cwd`` so scripts inside a checkout can be launched; bare names are
    looked up on the ``PATH`` of ``env``, falling back to ``os.environ``.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be found.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]
    if os.sep in head or (os.altsep is not None and os.altsep in head):
        candidate = (cwd or Path.cwd()) / head_path
        if not candidate.exists():
            raise FileNotFoundError(f"Executable '{head}' was not found")
        return [str(candidate), *rest]

    search_path = (env if env is not None else os.environ).get("PATH")
    resolved = shutil.which(head, path=search_path)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess:
    """Execute ``args`` after normalising the executable path.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata. With ``merge_stderr``
        the combined output is available on ``stdout`` and ``stderr`` is ``None``.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        PermissionError: If the executable exists but may not be run.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    resolved = options or CommandOptions()
    normalized = _normalize_args(args, resolved.cwd, resolved.env)
    capture = resolved.capture_output or resolved.merge_stderr

    try:
        # Bandit: commands originate from vetted configuration; we pass
        # argument lists directly without shell expansion.
        completed: CompletedProcess = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.STDOUT if resolved.merge_stderr else (subprocess.PIPE if capture else None),
            text=resolved.text,
            timeout=resolved.timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        timeout_msg = f"Command timed out after {resolved.timeout:.1f}s"
        stdout = _ensure_text(exc.stdout) or ""
        combined = f"{stdout}\n{timeout_msg}" if stdout else timeout_msg
        completed = subprocess.CompletedProcess(
            args=list(normalized),
            returncode=TIMEOUT_EXIT_CODE,
            stdout=combined if resolved.text else combined.encode(),
            stderr=None,
        )

    if resolved.check and completed.returncode != 0:
        raise SubprocessExecutionError(normalized, completed.returncode, completed.stdout, completed.stderr)

    return completed


__all__ = [
    "CommandOptions",
    "SubprocessExecutionError",
    "TIMEOUT_EXIT_CODE",
    "run_command",
]
