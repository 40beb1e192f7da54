"""Lifecycle event entities emitted while suites run."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar


class EventKind(str, Enum):
    """Kinds of lifecycle events delivered to reporters."""

    RUN_STARTING = "run_starting"
    RUN_COMPLETED = "run_completed"
    RUN_STOPPED = "run_stopped"
    RUN_ABORTED = "run_aborted"
    SUITE_STARTING = "suite_starting"
    SUITE_COMPLETED = "suite_completed"
    SUITE_ABORTED = "suite_aborted"
    TEST_STARTING = "test_starting"
    TEST_SUCCEEDED = "test_succeeded"
    TEST_FAILED = "test_failed"
    TEST_IGNORED = "test_ignored"
    TEST_PENDING = "test_pending"
    INFO_PROVIDED = "info_provided"
    SCOPE_OPENED = "scope_opened"
    SCOPE_CLOSED = "scope_closed"


@dataclass(frozen=True, order=True)
class Ordinal:
    """Position of an event in a run; comparable across forked trackers."""

    stamps: tuple[int, ...] = (0,)

    def next(self) -> Ordinal:
        return Ordinal(self.stamps[:-1] + (self.stamps[-1] + 1,))

    def next_new_old_pair(self) -> tuple[Ordinal, Ordinal]:
        """Return the first ordinal for a new thread and the next one for this thread."""
        for_new_thread = Ordinal(self.stamps + (0,))
        return for_new_thread, self.next()


class Tracker:
    """Hands out monotonically increasing ordinals."""

    def __init__(self, first_ordinal: Ordinal | None = None) -> None:
        self._current = first_ordinal or Ordinal()
        self._lock = threading.Lock()

    def next_ordinal(self) -> Ordinal:
        with self._lock:
            ordinal = self._current
            self._current = ordinal.next()
            return ordinal

    def next_tracker(self) -> Tracker:
        with self._lock:
            for_new_thread, for_this_thread = self._current.next_new_old_pair()
            self._current = for_this_thread
            return Tracker(for_new_thread)


@dataclass(frozen=True)
class NameInfo:
    """Identifies the suite and, optionally, the test an event is attributed to."""

    suite_name: str
    suite_id: str
    suite_class_name: str | None = None
    test_name: str | None = None


def _thread_name() -> str:
    return threading.current_thread().name


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, kw_only=True)
class RunEvent:
    """Fields shared by every lifecycle event."""

    kind: ClassVar[EventKind]

    ordinal: Ordinal
    thread_name: str = field(default_factory=_thread_name, compare=False)
    timestamp: datetime = field(default_factory=_now, compare=False)


@dataclass(frozen=True, kw_only=True)
class SuiteEvent(RunEvent):
    """Event attributed to one suite."""

    suite_name: str
    suite_id: str
    suite_class_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class TestEvent(SuiteEvent):
    """Event attributed to one test of a suite."""

    __test__ = False

    test_name: str
    test_text: str


@dataclass(frozen=True, kw_only=True)
class RunStarting(RunEvent):
    kind: ClassVar[EventKind] = EventKind.RUN_STARTING

    expected_test_count: int


@dataclass(frozen=True, kw_only=True)
class RunCompleted(RunEvent):
    kind: ClassVar[EventKind] = EventKind.RUN_COMPLETED

    duration: int | None = None


@dataclass(frozen=True, kw_only=True)
class RunStopped(RunEvent):
    kind: ClassVar[EventKind] = EventKind.RUN_STOPPED

    duration: int | None = None


@dataclass(frozen=True, kw_only=True)
class RunAborted(RunEvent):
    kind: ClassVar[EventKind] = EventKind.RUN_ABORTED

    message: str
    cause: BaseException | None = field(default=None, compare=False)


@dataclass(frozen=True, kw_only=True)
class SuiteStarting(SuiteEvent):
    kind: ClassVar[EventKind] = EventKind.SUITE_STARTING


@dataclass(frozen=True, kw_only=True)
class SuiteCompleted(SuiteEvent):
    kind: ClassVar[EventKind] = EventKind.SUITE_COMPLETED

    duration: int


@dataclass(frozen=True, kw_only=True)
class SuiteAborted(SuiteEvent):
    kind: ClassVar[EventKind] = EventKind.SUITE_ABORTED

    message: str
    cause: BaseException | None = field(default=None, compare=False)
    duration: int | None = None


@dataclass(frozen=True, kw_only=True)
class TestStarting(TestEvent):
    __test__ = False
    kind: ClassVar[EventKind] = EventKind.TEST_STARTING


@dataclass(frozen=True, kw_only=True)
class TestSucceeded(TestEvent):
    __test__ = False
    kind: ClassVar[EventKind] = EventKind.TEST_SUCCEEDED

    duration: int


@dataclass(frozen=True, kw_only=True)
class TestFailed(TestEvent):
    __test__ = False
    kind: ClassVar[EventKind] = EventKind.TEST_FAILED

    message: str
    duration: int
    cause: BaseException | None = field(default=None, compare=False)


@dataclass(frozen=True, kw_only=True)
class TestIgnored(TestEvent):
    __test__ = False
    kind: ClassVar[EventKind] = EventKind.TEST_IGNORED


@dataclass(frozen=True, kw_only=True)
class TestPending(TestEvent):
    __test__ = False
    kind: ClassVar[EventKind] = EventKind.TEST_PENDING

    duration: int


@dataclass(frozen=True, kw_only=True)
class InfoProvided(RunEvent):
    """Info message; `name_info` is None for calls made off the owning thread."""

    kind: ClassVar[EventKind] = EventKind.INFO_PROVIDED

    message: str
    name_info: NameInfo | None
    level: int
    about_a_pending_test: bool = False


@dataclass(frozen=True, kw_only=True)
class ScopeOpened(SuiteEvent):
    kind: ClassVar[EventKind] = EventKind.SCOPE_OPENED

    message: str
    level: int


@dataclass(frozen=True, kw_only=True)
class ScopeClosed(SuiteEvent):
    kind: ClassVar[EventKind] = EventKind.SCOPE_CLOSED

    message: str
    level: int


OUTCOME_KINDS = frozenset(
    {
        EventKind.TEST_SUCCEEDED,
        EventKind.TEST_FAILED,
        EventKind.TEST_IGNORED,
        EventKind.TEST_PENDING,
    }
)
