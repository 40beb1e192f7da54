"""Shared behavior tests."""

from __future__ import annotations

import pytest
from simple_spec_runner.suite_dsl import (
    DuplicateSharedBehaviorError,
    SharedBehaviorRegistry,
    Suite,
    UnknownSharedBehaviorError,
)


def _behaviors() -> SharedBehaviorRegistry:
    behaviors = SharedBehaviorRegistry()

    @behaviors.behavior("a non-empty stack")
    def _(spec: Suite) -> None:
        spec.it("should not be empty", lambda: None)
        spec.it("should return the top item on peek", lambda: None)

    return behaviors


def test_shared_behavior_tests_take_the_enclosing_prefix() -> None:
    def definition(spec: Suite) -> None:
        with spec.describe("A Stack with one item"):
            spec.behaves_like("a non-empty stack")
        with spec.describe("A full Stack"):
            spec.behaves_like("a non-empty stack")

    suite = Suite("StackSpec", definition, shared_behaviors=_behaviors())

    assert suite.test_names() == (
        "A Stack with one item should not be empty",
        "A Stack with one item should return the top item on peek",
        "A full Stack should not be empty",
        "A full Stack should return the top item on peek",
    )


def test_importing_twice_into_the_same_scope_is_a_duplicate() -> None:
    def definition(spec: Suite) -> None:
        spec.behaves_like("a non-empty stack")
        spec.behaves_like("a non-empty stack")

    with pytest.raises(Exception, match="Duplicate test name"):
        Suite("TwiceSpec", definition, shared_behaviors=_behaviors())


def test_unknown_shared_behavior_aborts_construction() -> None:
    with pytest.raises(UnknownSharedBehaviorError):
        Suite("MissingSpec", lambda spec: spec.behaves_like("nothing registered"))


def test_behavior_names_are_unique() -> None:
    behaviors = _behaviors()

    with pytest.raises(DuplicateSharedBehaviorError):
        behaviors.register("a non-empty stack", lambda spec: None)
    assert behaviors.names() == ("a non-empty stack",)
    assert "a non-empty stack" in behaviors


def test_provider_callable_can_be_imported_directly() -> None:
    def provider(spec: Suite) -> None:
        spec.it("works", lambda: None)

    suite = Suite("DirectSpec", lambda spec: spec.behaves_like(provider))

    assert suite.test_names() == ("works",)
