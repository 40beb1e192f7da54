"""Registration-time error taxonomy."""

from __future__ import annotations


class RegistrationError(Exception):
    """Base class for errors that abort suite construction."""


class NullTestNameError(RegistrationError):
    """Raised when a test is registered with a missing or empty name."""


class NullTagError(RegistrationError):
    """Raised when a tag list passed to a registration call contains None."""


class DuplicateTestNameError(RegistrationError):
    """Raised when two test cases share the same effective name."""

    def __init__(self, test_name: str) -> None:
        super().__init__(f"Duplicate test name: {test_name}")
        self.test_name = test_name


class RegistrationClosedError(RegistrationError):
    """Raised when registration is attempted after the registry was sealed."""


class UnknownTestNameError(LookupError):
    """Raised when a test name is not present in the registry."""

    def __init__(self, test_name: str) -> None:
        super().__init__(f'No test in this suite has name: "{test_name}"')
        self.test_name = test_name
