# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""High level orchestration of one diff-aware analysis run."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from .config import Settings
from .defaults import PWD_COMMAND
from .diff import DiffIndex, correlate
from .errors import AnalysisError, ExecutionError, LaunchError, RevisionError
from .executor import Executor
from .generated import filter_generated
from .installer import install_dependencies
from .logging import debug, fail, info, ok
from .models import AnalysisConfig, Issue, Tool
from .parsers import parse_tool_output
from .revision import prepare_revisions
from .tools import run_tool


class AnalysisState(str, Enum):
    """Enumerate the phases of a run."""

    PENDING = "pending"
    PREPARING = "preparing"
    INSTALLING_DEPS = "installing_deps"
    RUNNING_TOOL = "running_tool"
    AGGREGATED = "aggregated"
    FAILED = "failed"


class Analyser:
    """Run the configured tools against a checkout and keep issues on changed lines.

    An instance drives exactly one run. The executor session is stopped once
    the run finishes, whether it succeeded or failed.
    """

    def __init__(self, executor: Executor, tools: Sequence[Tool], settings: Settings | None = None) -> None:
        self._executor = executor
        self._tools = tuple(tools)
        self._settings = settings or Settings()
        self.state = AnalysisState.PENDING
        self.tool_index: int | None = None

    @property
    def _use_emoji(self) -> bool:
        return self._settings.output.emoji

    @property
    def _use_color(self) -> bool:
        return self._settings.output.color

    def run(self, config: AnalysisConfig) -> list[Issue]:
        """Analyse the event described by ``config``.

        Returns:
            list[Issue]: Issues in tool configuration order, then output order.

        Raises:
            AnalysisError: If the run was aborted; no partial result is returned.
        """

        if self.state is not AnalysisState.PENDING:
            raise RuntimeError("an Analyser instance can only run once")
        try:
            issues = self._run(config)
        except AnalysisError as exc:
            self.state = AnalysisState.FAILED
            fail(str(exc), use_emoji=self._use_emoji, use_color=self._use_color)
            raise
        finally:
            self._executor.stop()
        self.state = AnalysisState.AGGREGATED
        ok(f"Analysis finished with {len(issues)} issue(s)", use_emoji=self._use_emoji, use_color=self._use_color)
        return issues

    def _run(self, config: AnalysisConfig) -> list[Issue]:
        self.state = AnalysisState.PREPARING
        prepared = prepare_revisions(self._executor, config)
        index = DiffIndex.parse(prepared.diff, numbering=self._settings.numbering)
        info(
            f"Diff touches {len(index)} file(s) with added lines",
            use_emoji=self._use_emoji,
            use_color=self._use_color,
        )

        self.state = AnalysisState.INSTALLING_DEPS
        install_dependencies(
            self._executor,
            self._settings.install_command,
            use_emoji=self._use_emoji,
            use_color=self._use_color,
        )
        root = self._working_directory()

        issues: list[Issue] = []
        for tool_index, tool in enumerate(self._tools):
            self.state = AnalysisState.RUNNING_TOOL
            self.tool_index = tool_index
            issues.extend(self._run_tool(tool, prepared.base_ref, root, index))
        return issues

    def _working_directory(self) -> str:
        """Return the absolute working directory as reported by the session."""

        try:
            output = self._executor.execute(PWD_COMMAND)
        except (ExecutionError, LaunchError) as exc:
            raise RevisionError(PWD_COMMAND, exc) from exc
        return output.decode("utf-8", errors="replace").strip()

    def _run_tool(self, tool: Tool, base_ref: str, root: str, index: DiffIndex) -> list[Issue]:
        output = run_tool(self._executor, tool, base_ref)
        candidates = parse_tool_output(output, root=root)
        correlated = correlate(candidates, index, tool.name)
        kept = filter_generated(
            self._executor,
            root,
            correlated,
            command=self._settings.generated_command,
        )
        if self._settings.output.verbose:
            debug(
                f"{tool.name}: {len(candidates)} finding(s), {len(correlated)} on changed lines, {len(kept)} kept",
                use_emoji=self._use_emoji,
                use_color=self._use_color,
            )
        return kept


def analyse(
    executor: Executor,
    tools: Sequence[Tool],
    config: AnalysisConfig,
    settings: Settings | None = None,
) -> list[Issue]:
    """Run one analysis and return its issues; see :meth:`Analyser.run`."""

    return Analyser(executor, tools, settings).run(config)


__all__ = ["AnalysisState", "Analyser", "analyse"]
