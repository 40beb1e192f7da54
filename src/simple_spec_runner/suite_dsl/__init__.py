"""Suite builder exports."""

from .shared_behavior import (
    BehaviorProvider,
    DuplicateSharedBehaviorError,
    SharedBehaviorRegistry,
    UnknownSharedBehaviorError,
)
from .suite import Suite, SuiteDefinition

__all__ = [
    "Suite",
    "SuiteDefinition",
    "BehaviorProvider",
    "DuplicateSharedBehaviorError",
    "SharedBehaviorRegistry",
    "UnknownSharedBehaviorError",
]
