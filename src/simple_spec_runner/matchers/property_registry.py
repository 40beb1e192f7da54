"""Explicit registry of boolean properties used by `be_property`."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

PropertyAccessor = Callable[[object], bool]


class PropertyResolutionError(Exception):
    """Raised when a property name resolves to zero or to two accessors."""


@dataclass(frozen=True)
class PropertyCandidate:
    """One accessor registered for a type under a given name."""

    owner: type
    name: str
    accessor: PropertyAccessor


def _article(word: str) -> str:
    return "an" if word[:1].lower() in "aeiou" else "a"


def predicate_name(property_name: str) -> str:
    """Return the `is_` form of a property name, e.g. `empty` -> `is_empty`."""
    return f"is_{property_name}"


class PropertyRegistry:
    """Maps (type, property name) to boolean accessors.

    A property `empty` can be satisfied by an accessor registered as `empty`
    or as `is_empty`. Resolution requires exactly one of the two.
    """

    def __init__(self) -> None:
        self._accessors: dict[tuple[type, str], PropertyAccessor] = {}

    def register(self, owner: type, name: str, accessor: PropertyAccessor) -> None:
        if not name:
            raise ValueError("Property name must not be empty.")
        self._accessors[(owner, name)] = accessor

    def register_attributes(self, owner: type, *names: str) -> None:
        """Register accessors that read (and call, if callable) same-named attributes."""
        for name in names:
            self.register(owner, name, _attribute_accessor(name))

    def candidates(self, owner: type, property_name: str) -> tuple[PropertyCandidate, ...]:
        found: list[PropertyCandidate] = []
        for name in (property_name, predicate_name(property_name)):
            accessor = self._lookup(owner, name)
            if accessor is not None:
                found.append(PropertyCandidate(owner=owner, name=name, accessor=accessor))
        return tuple(found)

    def resolve(self, value: object, property_name: str) -> PropertyAccessor:
        return self.resolve_type(type(value), property_name, label=repr(value))

    def resolve_type(
        self, owner: type, property_name: str, *, label: str | None = None
    ) -> PropertyAccessor:
        subject = label if label is not None else owner.__name__
        found = self.candidates(owner, property_name)
        is_name = predicate_name(property_name)
        if not found:
            raise PropertyResolutionError(
                f"{subject} has neither {_article(property_name)} {property_name} "
                f"nor {_article(is_name)} {is_name} method"
            )
        if len(found) > 1:
            raise PropertyResolutionError(
                f"{subject} has both {_article(property_name)} {property_name} "
                f"and {_article(is_name)} {is_name} method"
            )
        return found[0].accessor

    def _lookup(self, owner: type, name: str) -> PropertyAccessor | None:
        for klass in owner.__mro__:
            accessor = self._accessors.get((klass, name))
            if accessor is not None:
                return accessor
        return None


def _attribute_accessor(name: str) -> PropertyAccessor:
    def access(value: object) -> bool:
        attribute = getattr(value, name)
        return bool(attribute() if callable(attribute) else attribute)

    return access


def _build_default_registry() -> PropertyRegistry:
    registry = PropertyRegistry()
    for sized in (list, tuple, dict, set, frozenset, str, bytes):
        registry.register(sized, "empty", lambda value: len(value) == 0)  # type: ignore[arg-type]
    return registry


DEFAULT_PROPERTY_REGISTRY = _build_default_registry()
