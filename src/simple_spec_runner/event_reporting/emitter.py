"""Builds lifecycle events for one suite and forwards them to a reporter."""

from __future__ import annotations

from typing import Any

from .events import (
    InfoProvided,
    NameInfo,
    ScopeClosed,
    ScopeOpened,
    SuiteAborted,
    SuiteCompleted,
    SuiteStarting,
    TestFailed,
    TestIgnored,
    TestPending,
    TestStarting,
    TestSucceeded,
    Tracker,
)
from .reporters import Reporter


class EventEmitter:
    """Sequences the events of one suite run through a shared tracker."""

    def __init__(self, reporter: Reporter, tracker: Tracker, suite: NameInfo) -> None:
        self._reporter = reporter
        self._tracker = tracker
        self._suite = suite

    @property
    def suite(self) -> NameInfo:
        return self._suite

    def name_info_for(self, test_name: str | None) -> NameInfo:
        return NameInfo(
            suite_name=self._suite.suite_name,
            suite_id=self._suite.suite_id,
            suite_class_name=self._suite.suite_class_name,
            test_name=test_name,
        )

    def _suite_fields(self) -> dict[str, Any]:
        return {
            "ordinal": self._tracker.next_ordinal(),
            "suite_name": self._suite.suite_name,
            "suite_id": self._suite.suite_id,
            "suite_class_name": self._suite.suite_class_name,
        }

    def _test_fields(self, test_name: str, test_text: str) -> dict[str, Any]:
        fields = self._suite_fields()
        fields["test_name"] = test_name
        fields["test_text"] = test_text
        return fields

    def suite_starting(self) -> None:
        self._reporter(SuiteStarting(**self._suite_fields()))

    def suite_completed(self, duration: int) -> None:
        self._reporter(SuiteCompleted(duration=duration, **self._suite_fields()))

    def suite_aborted(self, message: str, cause: BaseException | None, duration: int) -> None:
        self._reporter(
            SuiteAborted(
                message=message, cause=cause, duration=duration, **self._suite_fields()
            )
        )

    def test_starting(self, test_name: str, test_text: str) -> None:
        self._reporter(TestStarting(**self._test_fields(test_name, test_text)))

    def test_succeeded(self, test_name: str, test_text: str, duration: int) -> None:
        self._reporter(
            TestSucceeded(duration=duration, **self._test_fields(test_name, test_text))
        )

    # pylint: disable=too-many-arguments
    def test_failed(
        self,
        test_name: str,
        test_text: str,
        message: str,
        duration: int,
        cause: BaseException | None = None,
    ) -> None:
        self._reporter(
            TestFailed(
                message=message,
                duration=duration,
                cause=cause,
                **self._test_fields(test_name, test_text),
            )
        )

    # pylint: enable=too-many-arguments

    def test_ignored(self, test_name: str, test_text: str) -> None:
        self._reporter(TestIgnored(**self._test_fields(test_name, test_text)))

    def test_pending(self, test_name: str, test_text: str, duration: int) -> None:
        self._reporter(
            TestPending(duration=duration, **self._test_fields(test_name, test_text))
        )

    def info_provided(
        self,
        message: str,
        name_info: NameInfo | None,
        level: int,
        about_a_pending_test: bool = False,
    ) -> None:
        self._reporter(
            InfoProvided(
                ordinal=self._tracker.next_ordinal(),
                message=message,
                name_info=name_info,
                level=level,
                about_a_pending_test=about_a_pending_test,
            )
        )

    def scope_opened(self, message: str, level: int) -> None:
        self._reporter(ScopeOpened(message=message, level=level, **self._suite_fields()))

    def scope_closed(self, message: str, level: int) -> None:
        self._reporter(ScopeClosed(message=message, level=level, **self._suite_fields()))
