"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FilterSettings:
    """Tag selection applied to every suite of a run."""

    include: tuple[str, ...] | None
    exclude: tuple[str, ...]


@dataclass(frozen=True)
class RunSettings:
    """How the selected suites are run."""

    test_name: str | None
    stop_on_failure: bool


@dataclass(frozen=True)
class ReportSettings:
    """Where run results are written besides the console."""

    workbook: Path | None


@dataclass(frozen=True)
class RunConfiguration:
    """Top-level configuration aggregate."""

    path: Path
    suites: tuple[str, ...]
    filter: FilterSettings
    run: RunSettings
    report: ReportSettings
