"""Run execution domain exports."""

from .execution_engine import (
    ABORTING_ERRORS,
    ExecutionEngine,
    TestOutcome,
    TestStatus,
    elapsed_millis,
)
from .tag_filter import DEFAULT_TAG_FILTER, FilterDecision, TagFilter

__all__ = [
    "ABORTING_ERRORS",
    "ExecutionEngine",
    "TestOutcome",
    "TestStatus",
    "elapsed_millis",
    "DEFAULT_TAG_FILTER",
    "FilterDecision",
    "TagFilter",
]
