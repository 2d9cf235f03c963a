# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point for running an analysis from CI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from .analyser import analyse
from .config import Settings, load_settings
from .errors import AnalysisError, ConfigError
from .executor import FileSystemExecutor
from .logging import fail, info
from .models import AnalysisConfig
from .reporting import OutputFormat, render_issues

app = typer.Typer(
    name="prqa",
    help="Run static analysers and report only the issues on changed lines.",
    no_args_is_help=True,
    add_completion=False,
)

EVENT_OPTION = Annotated[
    str,
    typer.Option("--event", "-e", envvar="PRQA_EVENT", help="Event type: pull_request or push."),
]
BASE_URL_OPTION = Annotated[
    str,
    typer.Option("--base-url", envvar="PRQA_BASE_URL", help="Clone URL of the base repository."),
]
BASE_REF_OPTION = Annotated[
    str,
    typer.Option("--base-ref", envvar="PRQA_BASE_REF", help="Base branch (pull requests) or commit (pushes)."),
]
HEAD_URL_OPTION = Annotated[
    str,
    typer.Option("--head-url", envvar="PRQA_HEAD_URL", help="Clone URL of the head repository."),
]
HEAD_REF_OPTION = Annotated[
    str,
    typer.Option("--head-ref", envvar="PRQA_HEAD_REF", help="Head branch (pull requests) or commit (pushes)."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", exists=True, dir_okay=False, help="prqa.toml or pyproject.toml to load."),
]
WORKSPACE_OPTION = Annotated[
    Path | None,
    typer.Option("--workspace", help="Directory in which per-run working directories are created."),
]
FORMAT_OPTION = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", case_sensitive=False, help="Report format."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Print every executed command."),
]


def _resolve_settings(
    config_path: Path | None,
    *,
    workspace: Path | None,
    emoji: bool,
    verbose: bool,
) -> Settings:
    """Load settings and apply command line overrides."""

    settings = load_settings(config_path)
    output = settings.output.model_copy(
        update={
            "emoji": settings.output.emoji and emoji,
            "verbose": settings.output.verbose or verbose,
        },
    )
    updates: dict[str, object] = {"output": output}
    if workspace is not None:
        updates["workspace_dir"] = workspace
    return settings.model_copy(update=updates)


@app.callback()
def main() -> None:
    """Diff-aware static analysis for pull requests and pushes."""


@app.command("analyse")
def analyse_command(
    event: EVENT_OPTION,
    base_url: BASE_URL_OPTION = "",
    base_ref: BASE_REF_OPTION = "",
    head_url: HEAD_URL_OPTION = "",
    head_ref: HEAD_REF_OPTION = "",
    config: CONFIG_OPTION = None,
    workspace: WORKSPACE_OPTION = None,
    output_format: FORMAT_OPTION = OutputFormat.TEXT,
    emoji: EMOJI_OPTION = True,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Check out the event's revisions, run every configured tool and report issues."""

    use_emoji = emoji
    try:
        settings = _resolve_settings(config, workspace=workspace, emoji=emoji, verbose=verbose)
    except ConfigError as exc:
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=1) from exc

    use_emoji = settings.output.emoji
    use_color = settings.output.color
    run_config = AnalysisConfig(
        event_type=event,
        base_url=base_url,
        base_ref=base_ref,
        head_url=head_url,
        head_ref=head_ref,
    )
    executor = FileSystemExecutor(
        base_dir=settings.workspace_dir,
        env=settings.env,
        timeout=settings.timeout,
        verbose=settings.output.verbose,
        use_emoji=use_emoji,
        use_color=use_color,
    )
    info(
        f"Analysing {event} {base_ref}...{head_ref} with {len(settings.tools)} tool(s)",
        use_emoji=use_emoji,
        use_color=use_color,
    )
    try:
        issues = analyse(executor, settings.tools, run_config, settings)
    except AnalysisError as exc:
        raise typer.Exit(code=1) from exc

    console = Console(no_color=not use_color, highlight=False)
    render_issues(issues, output_format, console=console)


__all__ = ["app", "main"]
