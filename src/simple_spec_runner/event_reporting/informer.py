"""Informers: the side-channel test code uses to emit info messages.

The informer in effect changes over a suite's lifetime:

* registration phase: `RegistrationInformer` stores messages in the test tree
  so they are replayed in declaration order when the suite runs;
* while the suite runs outside a test: `SuiteInformer` fires immediately;
* while a test runs: `MessageRecordingInformer` buffers messages from the
  owning thread until the test's outcome event has been fired;
* after the suite ran: `ZombieInformer` rejects every call.

Only calls from the thread that owns the execution context carry a `NameInfo`.
Calls from threads started by a test are fired immediately, without one.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from .events import NameInfo

SUITE_INFO_LEVEL = 1
TEST_INFO_LEVEL = 2

# message, name info (None off the owning thread), level, about a pending test
MessageFirer = Callable[[str, NameInfo | None, int, bool], None]


class IllegalStateError(RuntimeError):
    """Raised when an operation is invoked in a state that does not allow it."""


class InformerClosedError(IllegalStateError):
    """Raised when an informer is used after its suite has finished running."""


class ConcurrentInformerModificationError(IllegalStateError):
    """Raised when the informer slot was swapped behind the engine's back."""


class NullMessageError(ValueError):
    """Raised when an informer receives None as message."""


class Informer(Protocol):  # pylint: disable=too-few-public-methods
    """Callable accepting one info message."""

    def __call__(self, message: str) -> None: ...


def _require_message(message: str | None) -> str:
    if message is None:
        raise NullMessageError("message was None")
    return message


class ThreadAwareness:  # pylint: disable=too-few-public-methods
    """Remembers the thread that created the instance."""

    def __init__(self) -> None:
        self._owner_thread_id = threading.get_ident()

    def is_constructing_thread(self) -> bool:
        return threading.get_ident() == self._owner_thread_id


@dataclass(frozen=True)
class ExecutionContext:
    """The scope currently executing, bound to the thread that executes it."""

    name_info: NameInfo
    owner_thread_id: int = field(default_factory=threading.get_ident)

    def name_info_for_caller(self) -> NameInfo | None:
        """Return the name info on the owning thread and None on any other thread."""
        if threading.get_ident() != self.owner_thread_id:
            return None
        return self.name_info


class RegistrationInformer:  # pylint: disable=too-few-public-methods
    """Informer in effect while a suite registers its tests."""

    context: ExecutionContext | None = None

    def __init__(self, record: Callable[[str], None]) -> None:
        self._record = record

    def __call__(self, message: str) -> None:
        self._record(_require_message(message))


class SuiteInformer(ThreadAwareness):
    """Fires info messages immediately; used while a suite runs outside tests."""

    def __init__(self, context: ExecutionContext, fire: MessageFirer) -> None:
        super().__init__()
        self.context = context
        self._fire = fire

    def __call__(self, message: str) -> None:
        text = _require_message(message)
        self._fire(text, self.context.name_info_for_caller(), SUITE_INFO_LEVEL, False)


class MessageRecordingInformer(ThreadAwareness):
    """Buffers info messages given on the owning thread while a test runs."""

    def __init__(self, context: ExecutionContext, fire: MessageFirer) -> None:
        super().__init__()
        self.context = context
        self._fire = fire
        self._recorded: list[str] = []

    def __call__(self, message: str) -> None:
        text = _require_message(message)
        if self.is_constructing_thread():
            self._recorded.append(text)
        else:
            self._fire(text, None, TEST_INFO_LEVEL, False)

    @property
    def recorded_messages(self) -> tuple[str, ...]:
        return tuple(self._recorded)

    def fire_recorded_messages(self, test_was_pending: bool) -> None:
        """Fire buffered messages in the order they were given, then forget them."""
        recorded, self._recorded = self._recorded, []
        for text in recorded:
            self._fire(text, self.context.name_info, TEST_INFO_LEVEL, test_was_pending)


class ZombieInformer:  # pylint: disable=too-few-public-methods
    """Informer installed once a suite has finished running."""

    context: ExecutionContext | None = None

    def __init__(self, suite_name: str) -> None:
        self._complaint = (
            f"Info cannot be provided for suite '{suite_name}' at this time: "
            "the suite has already finished running."
        )

    def __call__(self, message: str) -> None:
        _require_message(message)
        raise InformerClosedError(self._complaint)


class InformerSlot:
    """Holds the informer currently in effect and swaps it with compare-and-set."""

    def __init__(self, initial: Informer) -> None:
        self._current = initial
        self._lock = threading.Lock()

    @property
    def current(self) -> Informer:
        with self._lock:
            return self._current

    def install(self, informer: Informer) -> Informer:
        """Install `informer` and return the one it replaced."""
        with self._lock:
            previous, self._current = self._current, informer
            return previous

    def restore(self, expected: Informer, replacement: Informer) -> None:
        """Swap `expected` back out for `replacement`."""
        with self._lock:
            found, self._current = self._current, replacement
        if found is not expected:
            raise ConcurrentInformerModificationError(
                "The informer was replaced while a suite or test was running."
            )

    def __call__(self, message: str) -> None:
        self.current(message)
