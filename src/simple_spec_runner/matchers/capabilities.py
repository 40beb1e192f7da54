"""Matcher capabilities a suite builder can be constructed with."""

from __future__ import annotations

from dataclasses import dataclass

from .assertions import TestFailedError
from .matcher_algebra import Matcher


def check(left: object, matcher: Matcher, *, negate: bool = False) -> None:
    """Apply `matcher` to `left` and fail the running test when it does not hold."""
    result = matcher(left)
    if negate:
        result = result.negated()
    if not result.matches:
        raise TestFailedError(result.failure_message)


class ShouldExpectation:
    """`expect(left).should(matcher)` wording."""

    def __init__(self, left: object) -> None:
        self._left = left

    def should(self, matcher: Matcher) -> None:
        check(self._left, matcher)

    def should_not(self, matcher: Matcher) -> None:
        check(self._left, matcher, negate=True)


class MustExpectation:
    """`expect(left).must(matcher)` wording."""

    def __init__(self, left: object) -> None:
        self._left = left

    def must(self, matcher: Matcher) -> None:
        check(self._left, matcher)

    def must_not(self, matcher: Matcher) -> None:
        check(self._left, matcher, negate=True)


@dataclass(frozen=True)
class MatcherCapability:
    """Selects the expectation wording exposed by a suite."""

    verb: str
    expectation: type[ShouldExpectation] | type[MustExpectation]

    def expect(self, left: object) -> ShouldExpectation | MustExpectation:
        return self.expectation(left)


SHOULD_MATCHERS = MatcherCapability(verb="should", expectation=ShouldExpectation)
MUST_MATCHERS = MatcherCapability(verb="must", expectation=MustExpectation)


def should(left: object, matcher: Matcher) -> None:
    check(left, matcher)


def must(left: object, matcher: Matcher) -> None:
    check(left, matcher)
