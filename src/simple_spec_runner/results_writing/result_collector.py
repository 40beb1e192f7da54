"""Reporter that turns the event stream into result rows."""

from __future__ import annotations

import threading

from simple_spec_runner.event_reporting.events import (
    InfoProvided,
    RunEvent,
    SuiteAborted,
    TestFailed,
    TestIgnored,
    TestPending,
    TestSucceeded,
)

from .report_models import ResultRow, ResultStatus


class ResultCollector:
    """Collects one `ResultRow` per test outcome and per aborted suite.

    Info messages naming a test are attached to that test's row. Recorded
    messages arrive after the outcome event, so they are merged into the
    already collected row.
    """

    def __init__(self) -> None:
        self._rows: list[ResultRow] = []
        self._row_index: dict[tuple[str, str], int] = {}
        self._lock = threading.Lock()

    def __call__(self, event: RunEvent) -> None:
        with self._lock:
            if isinstance(event, InfoProvided):
                self._attach_info(event)
                return
            row = _row_for(event)
            if row is None:
                return
            self._row_index[(row.suite_name, row.test_name)] = len(self._rows)
            self._rows.append(row)

    @property
    def rows(self) -> tuple[ResultRow, ...]:
        with self._lock:
            return tuple(self._rows)

    def _attach_info(self, event: InfoProvided) -> None:
        name_info = event.name_info
        if name_info is None or name_info.test_name is None:
            return
        index = self._row_index.get((name_info.suite_name, name_info.test_name))
        if index is None:
            return
        row = self._rows[index]
        self._rows[index] = ResultRow(
            suite_name=row.suite_name,
            test_name=row.test_name,
            status=row.status,
            duration_ms=row.duration_ms,
            message=row.message,
            info=row.info + (event.message,),
        )


def _row_for(event: RunEvent) -> ResultRow | None:
    if isinstance(event, TestSucceeded):
        return ResultRow(event.suite_name, event.test_name, ResultStatus.SUCCEEDED, event.duration)
    if isinstance(event, TestFailed):
        return ResultRow(
            event.suite_name,
            event.test_name,
            ResultStatus.FAILED,
            event.duration,
            event.message,
        )
    if isinstance(event, TestIgnored):
        return ResultRow(event.suite_name, event.test_name, ResultStatus.IGNORED)
    if isinstance(event, TestPending):
        return ResultRow(event.suite_name, event.test_name, ResultStatus.PENDING, event.duration)
    if isinstance(event, SuiteAborted):
        return ResultRow(event.suite_name, "", ResultStatus.ABORTED, event.duration, event.message)
    return None
