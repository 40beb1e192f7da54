"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class ResultStatus(str, Enum):
    """Rendered status in the results sheet status column."""

    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    IGNORED = "IGNORED"
    PENDING = "PENDING"
    ABORTED = "ABORTED"


@dataclass(frozen=True)
class ResultRow:
    """One rendered row of the results sheet."""

    suite_name: str
    test_name: str
    status: ResultStatus
    duration_ms: int | None = None
    message: str = ""
    info: tuple[str, ...] = ()


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    output_path: Path
    suite_targets: tuple[str, ...]
    expected_test_count: int
    stopped: bool
