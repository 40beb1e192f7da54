"""Execution engine: runs registered tests and classifies their outcomes."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum

from simple_spec_runner.event_reporting.emitter import EventEmitter
from simple_spec_runner.event_reporting.informer import (
    SUITE_INFO_LEVEL,
    ExecutionContext,
    InformerSlot,
    MessageRecordingInformer,
)
from simple_spec_runner.event_reporting.reporters import Stopper
from simple_spec_runner.matchers.assertions import TestFailedError, TestPendingError
from simple_spec_runner.test_registration.nesting_guard import NestingGuard
from simple_spec_runner.test_registration.registry import (
    Branch,
    InfoLeaf,
    TestCase,
    TestLeaf,
    TestRegistry,
)

from .tag_filter import TagFilter

_LOGGER = logging.getLogger(__name__)

# Exception subclasses that abort the suite instead of failing one test.
ABORTING_ERRORS: tuple[type[BaseException], ...] = (MemoryError, RecursionError)


class TestStatus(str, Enum):
    """Terminal status of one executed test."""

    __test__ = False

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    PENDING = "pending"


@dataclass(frozen=True)
class TestOutcome:
    """Classified result of invoking one test body."""

    __test__ = False

    status: TestStatus
    duration: int
    message: str | None = None
    cause: BaseException | None = None


def elapsed_millis(started: float) -> int:
    return max(0, int((time.monotonic() - started) * 1000))


def _failure_message(exc: BaseException) -> str:
    text = str(exc)
    return text if text else type(exc).__name__


class ExecutionEngine:
    """Iterates the registry, invokes test bodies and emits their events."""

    def __init__(
        self,
        registry: TestRegistry,
        guard: NestingGuard,
        informers: InformerSlot,
    ) -> None:
        self._registry = registry
        self._guard = guard
        self._informers = informers

    def run_tests(
        self,
        test_name: str | None,
        *,
        emitter: EventEmitter,
        stopper: Stopper,
        tag_filter: TagFilter,
    ) -> None:
        """Run one selected test, or every test in registration order.

        A selected test runs even when it carries the ignore tag; include and
        exclude tags still apply to it.
        """
        if test_name is not None:
            test_case = self._registry.get(test_name)
            if stopper.stop_requested():
                _LOGGER.debug("Stop requested; skipping selected test %s", test_name)
                return
            if not tag_filter.decide(test_case.tags).filtered_out:
                self.run_test(test_case, emitter)
            return
        self._run_branch(self._registry.trunk, emitter, stopper, tag_filter)

    def _run_branch(
        self,
        branch: Branch,
        emitter: EventEmitter,
        stopper: Stopper,
        tag_filter: TagFilter,
    ) -> None:
        if not branch.is_trunk:
            emitter.scope_opened(branch.display_text(), branch.depth - 1)
        for node in branch.children:
            if stopper.stop_requested():
                _LOGGER.debug("Stop requested; skipping remaining tests of %s", emitter.suite)
                break
            if isinstance(node, TestLeaf):
                self._run_leaf(node.test_case, emitter, tag_filter)
            elif isinstance(node, InfoLeaf):
                emitter.info_provided(node.message, emitter.name_info_for(None), SUITE_INFO_LEVEL)
            else:
                self._run_branch(node, emitter, stopper, tag_filter)
        if not branch.is_trunk:
            emitter.scope_closed(branch.display_text(), branch.depth - 1)

    def _run_leaf(self, test_case: TestCase, emitter: EventEmitter, tag_filter: TagFilter) -> None:
        decision = tag_filter.decide(test_case.tags)
        if decision.filtered_out:
            return
        if decision.ignored:
            emitter.test_ignored(test_case.name, test_case.text)
            return
        self.run_test(test_case, emitter)

    def run_test(self, test_case: TestCase, emitter: EventEmitter) -> TestOutcome:
        """Invoke one test body and emit its starting, outcome and info events."""
        emitter.test_starting(test_case.name, test_case.text)
        informer = MessageRecordingInformer(
            ExecutionContext(emitter.name_info_for(test_case.name)),
            emitter.info_provided,
        )
        previous = self._informers.install(informer)
        try:
            outcome = self._invoke(test_case)
            self._emit_outcome(test_case, outcome, emitter)
            informer.fire_recorded_messages(outcome.status is TestStatus.PENDING)
        finally:
            self._informers.restore(informer, previous)
        return outcome

    def _invoke(self, test_case: TestCase) -> TestOutcome:
        started = time.monotonic()
        self._guard.drain_rejections()
        try:
            with self._guard.executing(test_case.name):
                test_case.body()
        except TestPendingError:
            duration = elapsed_millis(started)
            rejections = self._guard.drain_rejections()
            if rejections:
                return TestOutcome(TestStatus.FAILED, duration, rejections[0])
            return TestOutcome(TestStatus.PENDING, duration)
        except ABORTING_ERRORS:
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            duration = elapsed_millis(started)
            rejections = self._guard.drain_rejections()
            if rejections:
                return TestOutcome(TestStatus.FAILED, duration, rejections[0], exc)
            if test_case.pending and isinstance(exc, AssertionError):
                return TestOutcome(TestStatus.PENDING, duration)
            cause = exc.cause if isinstance(exc, TestFailedError) else exc
            return TestOutcome(TestStatus.FAILED, duration, _failure_message(exc), cause)

        duration = elapsed_millis(started)
        rejections = self._guard.drain_rejections()
        if rejections:
            return TestOutcome(TestStatus.FAILED, duration, rejections[0])
        if test_case.pending:
            return TestOutcome(TestStatus.PENDING, duration)
        return TestOutcome(TestStatus.SUCCEEDED, duration)

    @staticmethod
    def _emit_outcome(test_case: TestCase, outcome: TestOutcome, emitter: EventEmitter) -> None:
        if outcome.status is TestStatus.SUCCEEDED:
            emitter.test_succeeded(test_case.name, test_case.text, outcome.duration)
        elif outcome.status is TestStatus.PENDING:
            emitter.test_pending(test_case.name, test_case.text, outcome.duration)
        else:
            emitter.test_failed(
                test_case.name,
                test_case.text,
                outcome.message or "Test failed.",
                outcome.duration,
                outcome.cause,
            )
