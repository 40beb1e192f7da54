"""Property registry resolution tests."""

from __future__ import annotations

import pytest
from simple_spec_runner.matchers import (
    PropertyRegistry,
    PropertyResolutionError,
    TestFailedError,
    be_property,
    not_,
    should,
)


class Account:
    def __init__(self, frozen: bool) -> None:
        self.frozen = frozen

    def is_frozen(self) -> bool:
        return self.frozen


class Car:
    def __init__(self, parked: bool) -> None:
        self._parked = parked

    def is_parked(self) -> bool:
        return self._parked


def test_is_prefixed_accessor_resolves_the_plain_name() -> None:
    registry = PropertyRegistry()
    registry.register_attributes(Car, "is_parked")

    should(Car(parked=True), be_property("parked", registry=registry))
    should(Car(parked=False), not_(be_property("parked", registry=registry)))


def test_missing_property_reports_neither() -> None:
    registry = PropertyRegistry()

    with pytest.raises(PropertyResolutionError, match="has neither a parked nor an is_parked"):
        registry.resolve_type(Car, "parked")


def test_ambiguous_property_reports_both() -> None:
    registry = PropertyRegistry()
    registry.register_attributes(Account, "frozen", "is_frozen")

    with pytest.raises(PropertyResolutionError, match="has both a frozen and an is_frozen"):
        registry.resolve_type(Account, "frozen")


def test_eager_resolution_fails_when_the_matcher_is_built() -> None:
    registry = PropertyRegistry()
    registry.register_attributes(Account, "frozen", "is_frozen")

    with pytest.raises(PropertyResolutionError):
        be_property("frozen", owner=Account, registry=registry)


def test_lazy_resolution_fails_the_test_whatever_the_polarity() -> None:
    registry = PropertyRegistry()

    with pytest.raises(TestFailedError, match="neither"):
        should(Car(parked=True), not_(be_property("parked", registry=registry)))


def test_accessors_registered_on_a_base_class_apply_to_subclasses() -> None:
    class SportsCar(Car):
        pass

    registry = PropertyRegistry()
    registry.register(Car, "parked", lambda value: value.is_parked())  # type: ignore[attr-defined]

    should(SportsCar(parked=True), be_property("parked", registry=registry))
