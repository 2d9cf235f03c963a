# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the executor, the pipeline stages and the CLI."""

from __future__ import annotations

from collections.abc import Sequence


class PrqaError(Exception):
    """Base class for every error raised by prqa."""


class ExecutionError(PrqaError):
    """Raised when a command ran to completion but exited with a non-zero status.

    This is a signalling channel as much as an error: analysers use it to say
    "issues found" and the generated-file detector uses it to answer "no".
    """

    def __init__(self, command: Sequence[str], exit_code: int, output: bytes = b"") -> None:
        """Initialise the error with the executed command and its exit status.

        Args:
            command: Command and arguments that were executed.
            exit_code: Exit status reported by the process.
            output: Combined stdout/stderr captured before the process exited.
        """

        super().__init__(f"Command '{command[0] if command else '<none>'}' exited with status {exit_code}")
        self.command = tuple(command)
        self.exit_code = exit_code
        self.output = output


class LaunchError(PrqaError):
    """Raised when a command could not be started at all."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        """Initialise the error.

        Args:
            command: Command that failed to launch.
            reason: Human readable reason reported by the operating system.
        """

        super().__init__(f"Could not launch '{command[0] if command else '<none>'}': {reason}")
        self.command = tuple(command)
        self.reason = reason


class ConfigError(PrqaError):
    """Raised when configuration input is invalid."""


class AnalysisError(PrqaError):
    """Raised when a run is aborted; no partial issue list is produced."""


class UnsupportedEventError(AnalysisError):
    """Raised when the configured event type is neither a pull request nor a push."""

    def __init__(self, event_type: object) -> None:
        super().__init__(f"Unsupported event type: {event_type!r}")
        self.event_type = event_type


class RevisionError(AnalysisError):
    """Raised when cloning, fetching, checking out or diffing fails."""

    def __init__(self, command: Sequence[str], cause: PrqaError) -> None:
        super().__init__(f"Could not run {' '.join(command)}: {cause}")
        self.command = tuple(command)
        self.cause = cause


class ToolLaunchError(AnalysisError):
    """Raised when an analysis tool could not be started."""

    def __init__(self, tool: str, cause: LaunchError) -> None:
        super().__init__(f"Could not launch tool {tool!r}: {cause.reason}")
        self.tool = tool
        self.cause = cause


class DetectorLaunchError(AnalysisError):
    """Raised when the generated-file detector could not be started."""

    def __init__(self, command: Sequence[str], cause: LaunchError) -> None:
        super().__init__(f"Could not launch generated-file detector {command[0]!r}: {cause.reason}")
        self.command = tuple(command)
        self.cause = cause


__all__ = [
    "AnalysisError",
    "ConfigError",
    "DetectorLaunchError",
    "ExecutionError",
    "LaunchError",
    "PrqaError",
    "RevisionError",
    "ToolLaunchError",
    "UnsupportedEventError",
]
