# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diff-aware static analysis for pull requests and pushes."""

from __future__ import annotations

from importlib import metadata

from .analyser import Analyser, AnalysisState, analyse
from .errors import (
    AnalysisError,
    ConfigError,
    DetectorLaunchError,
    ExecutionError,
    LaunchError,
    PrqaError,
    RevisionError,
    ToolLaunchError,
    UnsupportedEventError,
)
from .models import AnalysisConfig, EventType, Issue, RawIssue, Tool

__all__ = [
    "AnalysisConfig",
    "AnalysisError",
    "AnalysisState",
    "Analyser",
    "ConfigError",
    "DetectorLaunchError",
    "EventType",
    "ExecutionError",
    "Issue",
    "LaunchError",
    "PrqaError",
    "RawIssue",
    "RevisionError",
    "Tool",
    "ToolLaunchError",
    "UnsupportedEventError",
    "__version__",
    "analyse",
]

try:
    __version__ = metadata.version("prqa")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
