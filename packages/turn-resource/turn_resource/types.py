"""Core data types for resource allocation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from turn.types import TriggerPhase


class ResourceType(Enum):
    """Category of an allocatable resource. ANY matches every category."""

    ANY = "any"
    WATER = "water"
    NUTRIENT = "nutrient"
    ENERGY = "energy"

    def matches(self, other: ResourceType) -> bool:
        return self is other or self is ResourceType.ANY or other is ResourceType.ANY


@dataclass(frozen=True)
class ResourceSinkData:
    """Immutable per-sink configuration.

    Attributes:
        initial_value: Amount pushed to the owner when the sink starts.
        increment_per_resource: Amount each allocated resource is worth.
        has_max_increments: Whether ``max_increments`` caps concurrent allocations.
        max_increments: Cap on resources allocated at once.
        has_max_increments_per_turn: Whether ``max_increments_per_turn`` applies.
        max_increments_per_turn: Cap on allocations between two increment triggers.
        deferred_increment: Realize increments at ``increment_trigger`` instead of
            at allocation time.
        increment_trigger: Phase at which deferred increments are realized.
        allocation_type: Resource type this sink accepts.
    """

    initial_value: int = 0
    increment_per_resource: int = 1
    has_max_increments: bool = False
    max_increments: int = 0
    has_max_increments_per_turn: bool = False
    max_increments_per_turn: int = 0
    deferred_increment: bool = False
    increment_trigger: TriggerPhase = TriggerPhase.PLANTS_GROW
    allocation_type: ResourceType = ResourceType.ANY

    def __post_init__(self) -> None:
        if self.has_max_increments and self.max_increments < 0:
            raise ValueError(f"max_increments must be >= 0, got {self.max_increments}")
        if self.has_max_increments_per_turn and self.max_increments_per_turn < 0:
            raise ValueError(
                f"max_increments_per_turn must be >= 0, got {self.max_increments_per_turn}"
            )


class AllocationError(Exception):
    """Base class for resource allocation contract violations."""

