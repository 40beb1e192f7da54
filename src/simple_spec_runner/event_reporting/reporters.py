"""Reporter and stopper collaborators consuming the event stream."""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from .events import EventKind, RunEvent

_LOGGER = logging.getLogger(__name__)
_PACKAGE_LOGGER = logging.getLogger("simple_spec_runner")
_PACKAGE_LOGGER.addHandler(logging.NullHandler())


class Reporter(Protocol):  # pylint: disable=too-few-public-methods
    """Consumer of the ordered lifecycle event stream."""

    def __call__(self, event: RunEvent) -> None: ...


class Stopper(Protocol):  # pylint: disable=too-few-public-methods
    """Cooperative stop signal polled between tests."""

    def stop_requested(self) -> bool: ...


class NeverStop:  # pylint: disable=too-few-public-methods
    """Stopper that never requests a stop."""

    def stop_requested(self) -> bool:
        return False


class StopOnRequest:
    """Thread-safe stopper flipped by `request_stop`."""

    def __init__(self) -> None:
        self._flag = threading.Event()

    def request_stop(self) -> None:
        self._flag.set()

    def stop_requested(self) -> bool:
        return self._flag.is_set()


class EventRecorder:
    """Keeps every received event in arrival order."""

    def __init__(self) -> None:
        self._events: list[RunEvent] = []
        self._lock = threading.Lock()

    def __call__(self, event: RunEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> tuple[RunEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def kinds(self) -> list[EventKind]:
        return [event.kind for event in self.events]

    def of_kind(self, kind: EventKind) -> list[RunEvent]:
        return [event for event in self.events if event.kind is kind]


class DispatchReporter:
    """Fans events out to several reporters, one event at a time."""

    def __init__(self, reporters: Iterable[Reporter]) -> None:
        self._reporters = tuple(reporters)
        self._lock = threading.RLock()

    @property
    def reporters(self) -> Sequence[Reporter]:
        return self._reporters

    def __call__(self, event: RunEvent) -> None:
        with self._lock:
            for reporter in self._reporters:
                reporter(event)


class CatchReporter:
    """Shields the engine from exceptions raised by a reporter."""

    def __init__(self, reporter: Reporter) -> None:
        self._reporter = reporter

    def __call__(self, event: RunEvent) -> None:
        try:
            self._reporter(event)
        except Exception:  # pylint: disable=broad-exception-caught
            _LOGGER.exception("Reporter %r failed while handling %s", self._reporter, event.kind)


def wrap_reporter_if_necessary(reporter: Reporter) -> Reporter:
    """Wrap plain reporters so a failing reporter cannot end a run."""
    if isinstance(reporter, (CatchReporter, DispatchReporter)):
        return reporter
    return CatchReporter(reporter)


@dataclass(frozen=True)
class RunSummary:
    """Counters derived from the event stream of one run."""

    succeeded: int = 0
    failed: int = 0
    ignored: int = 0
    pending: int = 0
    suites_completed: int = 0
    suites_aborted: int = 0

    @property
    def all_passed(self) -> bool:
        return self.failed == 0 and self.suites_aborted == 0


class SummaryReporter:
    """Counts outcomes into a `RunSummary`."""

    _TRACKED = {
        EventKind.TEST_SUCCEEDED: "succeeded",
        EventKind.TEST_FAILED: "failed",
        EventKind.TEST_IGNORED: "ignored",
        EventKind.TEST_PENDING: "pending",
        EventKind.SUITE_COMPLETED: "suites_completed",
        EventKind.SUITE_ABORTED: "suites_aborted",
    }

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()
        self._lock = threading.Lock()

    def __call__(self, event: RunEvent) -> None:
        counter = self._TRACKED.get(event.kind)
        if counter is None:
            return
        with self._lock:
            self._counts[counter] += 1

    def summary(self) -> RunSummary:
        with self._lock:
            return RunSummary(**dict(self._counts))


class StopOnFailureReporter:  # pylint: disable=too-few-public-methods
    """Requests a stop once a test fails or a suite aborts."""

    _STOPPING = frozenset({EventKind.TEST_FAILED, EventKind.SUITE_ABORTED})

    def __init__(self, stopper: StopOnRequest) -> None:
        self._stopper = stopper

    def __call__(self, event: RunEvent) -> None:
        if event.kind in self._STOPPING:
            self._stopper.request_stop()
