"""turn-garden - Session wiring for the tile effect and resource sink core."""
from __future__ import annotations

from turn_garden.components import Tile, TileEffects
from turn_garden.session import GameSession

# Re-export the core
from turn import (
    NO_LOCATIONS, TURN_PHASES, DeadEntityError, EntityId, GridLocation,
    LocationSet, TriggerPhase, TurnContext, TurnEngine, World,
)

# Re-export the extensions
from turn_spatial import TileGrid, expand_footprint, resolve_footprint
from turn_signal import ListenerHandle, TriggerDispatcher, make_trigger_system
from turn_field import FieldHelper, FieldPropagator, FieldStore, FieldType, field_strength_at
from turn_effect import ApplyField, AreaEffect, EffectState, LabelBoard, TileEffect
from turn_resource import (
    AllocationError, Resource, ResourceSink,
    ResourceSinkData, ResourceType,
)

__all__ = [
    "GameSession", "Tile", "TileEffects",
    "NO_LOCATIONS", "TURN_PHASES", "DeadEntityError", "EntityId", "GridLocation",
    "LocationSet", "TriggerPhase", "TurnContext", "TurnEngine", "World",
    "TileGrid", "expand_footprint", "resolve_footprint",
    "ListenerHandle", "TriggerDispatcher", "make_trigger_system",
    "FieldHelper", "FieldPropagator", "FieldStore", "FieldType", "field_strength_at",
    "ApplyField", "AreaEffect", "EffectState", "LabelBoard", "TileEffect",
    "AllocationError", "Resource", "ResourceSink",
    "ResourceSinkData", "ResourceType",
]
