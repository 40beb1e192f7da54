"""Failure and pending signals raised from test bodies."""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn, TypeVar

E = TypeVar("E", bound=BaseException)


class TestFailedError(AssertionError):
    """Signals an assertion failure inside a test body."""

    __test__ = False

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class TestPendingError(Exception):
    """Signals that the test has not been written yet."""

    __test__ = False


def fail(message: str = "Test failed.", cause: BaseException | None = None) -> NoReturn:
    """Fail the running test with `message`."""
    raise TestFailedError(message, cause)


def pending() -> NoReturn:
    """Mark the running test as pending."""
    raise TestPendingError("Test is pending.")


def intercept(expected: type[E], function: Callable[[], object]) -> E:
    """Run `function` and return the exception of type `expected` it raises."""
    try:
        function()
    except expected as exc:
        return exc
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise TestFailedError(
            f"Expected exception {expected.__name__} to be thrown, "
            f"but {type(exc).__name__} was thrown.",
            exc,
        ) from exc
    raise TestFailedError(
        f"Expected exception {expected.__name__} to be thrown, but no exception was thrown."
    )
