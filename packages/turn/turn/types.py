"""Shared type aliases, phases, and errors for the turn engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable

EntityId = int

GridLocation = tuple[int, int]
LocationSet = frozenset[GridLocation]

NO_LOCATIONS: LocationSet = frozenset()


class TriggerPhase(Enum):
    """Stages of a turn at which effects and sinks may react."""

    PERSISTENT = "persistent"  # on activation, and when tiles are placed nearby
    PLANT_ACTIVE = "plant_active"  # right after the player ends their turn
    TRASH_DAMAGE = "trash_damage"  # after plants activate
    TRASH_ACTIVE = "trash_active"  # after trash deals damage
    TRASH_SPREAD = "trash_spread"
    PLANTS_GROW = "plants_grow"  # right before the player starts their turn


# Fixed per-turn order. PERSISTENT is fired out of band.
TURN_PHASES: tuple[TriggerPhase, ...] = (
    TriggerPhase.PLANT_ACTIVE,
    TriggerPhase.TRASH_DAMAGE,
    TriggerPhase.TRASH_ACTIVE,
    TriggerPhase.TRASH_SPREAD,
    TriggerPhase.PLANTS_GROW,
)


@dataclass(frozen=True, slots=True)
class TurnContext:
    turn_number: int
    phase: TriggerPhase
    triggerer: EntityId | None
    locations: LocationSet
    request_stop: Callable[[], None]


class DeadEntityError(KeyError):
    """Raised when operating on an entity that is not alive."""

    def __init__(self, entity_id: int, message: str) -> None:
        self.entity_id = entity_id
        super().__init__(message)


def as_location_set(locations: Iterable[GridLocation]) -> LocationSet:
    """Normalise any iterable of (x, y) pairs to a LocationSet."""
    if isinstance(locations, frozenset):
        return locations
    return frozenset((x, y) for x, y in locations)


if TYPE_CHECKING:
    from turn.world import World

System = Callable[["World", TurnContext], None]
