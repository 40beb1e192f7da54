"""Small matcher algebra: each matcher maps a left value to a `MatchResult`."""

from __future__ import annotations

from collections.abc import Callable, Sized
from dataclasses import dataclass

from .assertions import TestFailedError
from .property_registry import (
    DEFAULT_PROPERTY_REGISTRY,
    PropertyAccessor,
    PropertyRegistry,
    PropertyResolutionError,
)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of applying a matcher, with messages for both polarities."""

    matches: bool
    failure_message: str
    negated_failure_message: str

    def negated(self) -> MatchResult:
        return MatchResult(
            matches=not self.matches,
            failure_message=self.negated_failure_message,
            negated_failure_message=self.failure_message,
        )


class Matcher:
    """Wraps a function from left value to `MatchResult`."""

    def __init__(self, apply: Callable[[object], MatchResult], description: str) -> None:
        self._apply = apply
        self.description = description

    def __call__(self, left: object) -> MatchResult:
        return self._apply(left)

    def and_(self, other: Matcher) -> Matcher:
        def apply(left: object) -> MatchResult:
            first = self(left)
            if not first.matches:
                return first
            second = other(left)
            return MatchResult(
                matches=second.matches,
                failure_message=f"{first.negated_failure_message}, but {second.failure_message}",
                negated_failure_message=(
                    f"{first.negated_failure_message}, and {second.negated_failure_message}"
                ),
            )

        return Matcher(apply, f"{self.description} and {other.description}")

    def or_(self, other: Matcher) -> Matcher:
        def apply(left: object) -> MatchResult:
            first = self(left)
            if first.matches:
                return first
            second = other(left)
            return MatchResult(
                matches=second.matches,
                failure_message=f"{first.failure_message}, and {second.failure_message}",
                negated_failure_message=(
                    f"{first.failure_message}, but {second.negated_failure_message}"
                ),
            )

        return Matcher(apply, f"{self.description} or {other.description}")

    def __repr__(self) -> str:
        return f"Matcher({self.description})"


def not_(matcher: Matcher) -> Matcher:
    return Matcher(lambda left: matcher(left).negated(), f"not {matcher.description}")


def equal(right: object) -> Matcher:
    def apply(left: object) -> MatchResult:
        return MatchResult(
            matches=left == right,
            failure_message=f"{left!r} did not equal {right!r}",
            negated_failure_message=f"{left!r} equaled {right!r}",
        )

    return Matcher(apply, f"equal {right!r}")


def be(right: object) -> Matcher:
    """Identity for None/bool singletons, equality otherwise."""

    def apply(left: object) -> MatchResult:
        if right is None or isinstance(right, bool):
            matches = left is right
        else:
            matches = left == right
        return MatchResult(
            matches=matches,
            failure_message=f"{left!r} was not {right!r}",
            negated_failure_message=f"{left!r} was {right!r}",
        )

    return Matcher(apply, f"be {right!r}")


def be_a(expected_type: type) -> Matcher:
    type_name = expected_type.__name__

    def apply(left: object) -> MatchResult:
        return MatchResult(
            matches=isinstance(left, expected_type),
            failure_message=f"{left!r} was not an instance of {type_name}",
            negated_failure_message=f"{left!r} was an instance of {type_name}",
        )

    return Matcher(apply, f"be a {type_name}")


def contain(element: object) -> Matcher:
    def apply(left: object) -> MatchResult:
        try:
            matches = element in left  # type: ignore[operator]
        except TypeError:
            matches = False
        return MatchResult(
            matches=matches,
            failure_message=f"{left!r} did not contain element {element!r}",
            negated_failure_message=f"{left!r} contained element {element!r}",
        )

    return Matcher(apply, f"contain {element!r}")


def have_size(expected: int) -> Matcher:
    def apply(left: object) -> MatchResult:
        if not isinstance(left, Sized):
            return MatchResult(
                matches=False,
                failure_message=f"{left!r} has no size",
                negated_failure_message=f"{left!r} has no size",
            )
        actual = len(left)
        return MatchResult(
            matches=actual == expected,
            failure_message=f"{left!r} did not have size {expected}",
            negated_failure_message=f"{left!r} had size {expected}",
        )

    return Matcher(apply, f"have size {expected}")


have_length = have_size


def be_property(
    property_name: str,
    *,
    owner: type | None = None,
    registry: PropertyRegistry = DEFAULT_PROPERTY_REGISTRY,
) -> Matcher:
    """Match a boolean property looked up in `registry`.

    With `owner`, the accessor is resolved when the matcher is built and an
    ambiguous or missing property raises `PropertyResolutionError` right away.
    Otherwise it is resolved against the left value's type when applied, and a
    resolution problem fails the test whatever the polarity.
    """
    if not property_name:
        raise ValueError("Property name must not be empty.")
    eager: PropertyAccessor | None = None
    if owner is not None:
        eager = registry.resolve_type(owner, property_name)

    def apply(left: object) -> MatchResult:
        accessor = eager
        if accessor is None:
            try:
                accessor = registry.resolve(left, property_name)
            except PropertyResolutionError as exc:
                raise TestFailedError(str(exc), exc) from exc
        result = bool(accessor(left))
        return MatchResult(
            matches=result,
            failure_message=f"{left!r} was not {property_name}",
            negated_failure_message=f"{left!r} was {property_name}",
        )

    return Matcher(apply, f"be {property_name}")


def be_empty() -> Matcher:
    return be_property("empty")
