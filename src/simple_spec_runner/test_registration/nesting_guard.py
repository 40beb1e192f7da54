"""Registration-phase state machine that rejects nested registrations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum


class RegistrationPhase(str, Enum):
    """States of the registration phase."""

    REGISTERING = "registering"
    EXECUTING = "executing"


class RegistrationAction(str, Enum):
    """Registration actions subject to the nesting check."""

    TEST = "test"
    IGNORED_TEST = "ignored test"
    GROUP = "group"
    SHARED_BEHAVIOR = "shared behavior"


_REJECTION_MESSAGES = {
    RegistrationAction.TEST: "A test cannot be nested inside another test.",
    RegistrationAction.IGNORED_TEST: "An ignored test cannot be nested inside another test.",
    RegistrationAction.GROUP: "A group cannot be nested inside a test.",
    RegistrationAction.SHARED_BEHAVIOR: "Shared behavior cannot be imported inside a test.",
}


@dataclass(frozen=True)
class RegistrationAttempt:
    """Result of checking whether a registration action is allowed."""

    accepted: bool
    action: RegistrationAction
    message: str | None = None

    @staticmethod
    def allowed(action: RegistrationAction) -> RegistrationAttempt:
        return RegistrationAttempt(accepted=True, action=action)

    @staticmethod
    def rejected(action: RegistrationAction, test_name: str) -> RegistrationAttempt:
        return RegistrationAttempt(
            accepted=False,
            action=action,
            message=f"{_REJECTION_MESSAGES[action]} (while running: {test_name})",
        )


class NestingGuard:
    """Tracks whether a test body is executing and records illegal registrations.

    Rejections are returned as values and remembered for the executing test;
    the execution engine turns them into a failure of that test.
    """

    def __init__(self) -> None:
        self._phase = RegistrationPhase.REGISTERING
        self._executing_test: str | None = None
        self._rejections: list[str] = []

    @property
    def phase(self) -> RegistrationPhase:
        return self._phase

    @property
    def executing_test(self) -> str | None:
        return self._executing_test

    @contextmanager
    def executing(self, test_name: str) -> Iterator[None]:
        previous_phase, previous_test = self._phase, self._executing_test
        self._phase = RegistrationPhase.EXECUTING
        self._executing_test = test_name
        try:
            yield
        finally:
            self._phase = previous_phase
            self._executing_test = previous_test

    def check_registration(self, action: RegistrationAction) -> RegistrationAttempt:
        if self._phase is RegistrationPhase.REGISTERING:
            return RegistrationAttempt.allowed(action)
        attempt = RegistrationAttempt.rejected(action, self._executing_test or "")
        self._rejections.append(attempt.message or "")
        return attempt

    def drain_rejections(self) -> tuple[str, ...]:
        drained = tuple(self._rejections)
        self._rejections.clear()
        return drained
