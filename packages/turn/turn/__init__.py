"""turn - A minimal turn-phase engine in Python."""

from turn.clock import TurnClock
from turn.engine import TurnEngine
from turn.types import (
    NO_LOCATIONS,
    TURN_PHASES,
    DeadEntityError,
    EntityId,
    GridLocation,
    LocationSet,
    TriggerPhase,
    TurnContext,
    as_location_set,
)
from turn.world import World

__all__ = [
    "TurnEngine",
    "World",
    "TurnClock",
    "TurnContext",
    "TriggerPhase",
    "TURN_PHASES",
    "EntityId",
    "GridLocation",
    "LocationSet",
    "NO_LOCATIONS",
    "as_location_set",
    "DeadEntityError",
]
