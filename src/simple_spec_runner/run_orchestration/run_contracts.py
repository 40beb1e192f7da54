"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from simple_spec_runner.event_reporting.reporters import RunSummary


@dataclass(frozen=True)
class RunRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for executing one run."""

    suite_targets: tuple[str, ...] = ()
    config_path: str | None = None
    test_name: str | None = None
    include_tags: tuple[str, ...] = ()
    exclude_tags: tuple[str, ...] = ()
    stop_on_failure: bool = False
    workbook_path: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    summary: RunSummary
    stopped: bool
    workbook_path: Path | None = None

    @property
    def all_passed(self) -> bool:
        return self.summary.all_passed


@dataclass(frozen=True)
class RunPlan:
    """Resolved settings for one run, merged from request and configuration."""

    suite_targets: tuple[str, ...]
    test_name: str | None = None
    include_tags: tuple[str, ...] | None = None
    exclude_tags: tuple[str, ...] = field(default_factory=tuple)
    stop_on_failure: bool = False
    workbook_path: Path | None = None
