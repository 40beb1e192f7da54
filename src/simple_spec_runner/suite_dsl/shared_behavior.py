"""Named batches of test definitions importable into several suites."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from simple_spec_runner.test_registration.registration_errors import RegistrationError

if TYPE_CHECKING:
    from .suite import Suite

BehaviorProvider = Callable[["Suite"], None]


class UnknownSharedBehaviorError(RegistrationError):
    """Raised when a suite imports a shared behavior that is not registered (yet)."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No shared behavior registered under name: {name}")
        self.name = name


class DuplicateSharedBehaviorError(RegistrationError):
    """Raised when two shared behaviors are registered under the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate shared behavior name: {name}")
        self.name = name


class SharedBehaviorRegistry:
    """Registry of shared behaviors, looked up by name at suite construction."""

    def __init__(self) -> None:
        self._providers: dict[str, BehaviorProvider] = {}

    def register(self, name: str, provider: BehaviorProvider) -> BehaviorProvider:
        if not name:
            raise ValueError("Shared behavior name must not be empty.")
        if name in self._providers:
            raise DuplicateSharedBehaviorError(name)
        self._providers[name] = provider
        return provider

    def behavior(self, name: str) -> Callable[[BehaviorProvider], BehaviorProvider]:
        """Decorator form of `register`."""

        def decorate(provider: BehaviorProvider) -> BehaviorProvider:
            return self.register(name, provider)

        return decorate

    def lookup(self, name: str) -> BehaviorProvider:
        try:
            return self._providers[name]
        except KeyError as exc:
            raise UnknownSharedBehaviorError(name) from exc

    def names(self) -> tuple[str, ...]:
        return tuple(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers
