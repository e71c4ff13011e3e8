"""GameSession - session-scoped context wiring tiles, effects and sinks."""
from __future__ import annotations

import logging
from typing import Iterable

from turn import TURN_PHASES, TurnEngine, World
from turn.types import (
    NO_LOCATIONS,
    EntityId,
    GridLocation,
    LocationSet,
    TriggerPhase,
    as_location_set,
)
from turn_effect import LabelBoard, TileEffect
from turn_field import FieldHelper, FieldPropagator, FieldStore, FieldType, field_strength_at
from turn_garden.components import Tile, TileEffects
from turn_resource import ResourceSink, ResourceSinkData
from turn_resource.sink import AmountCallback
from turn_signal import TriggerDispatcher, make_trigger_system
from turn_spatial import TileGrid

logger = logging.getLogger(__name__)


class GameSession:
    """Everything that lives for one game session.

    The session owns the turn engine, its world, the trigger dispatcher, the
    tile grid and the label board, and is passed to effects as their host.
    Despawning an entity tears down its effects (each unaffects exactly once)
    and its resource sink (resources freed, owner push skipped).
    """

    def __init__(
        self,
        width: int,
        height: int,
        phases: Iterable[TriggerPhase] = TURN_PHASES,
    ) -> None:
        self._engine = TurnEngine(phases)
        self._dispatcher = TriggerDispatcher()
        self._grid = TileGrid(width, height)
        self._labels = LabelBoard()
        self._closed = False

        self._engine.add_system(make_trigger_system(self._dispatcher))
        world = self._engine.world
        world.on_detach(TileEffects, self._on_effects_detached)
        world.on_detach(ResourceSink, self._on_sink_detached)
        world.on_detach(Tile, self._on_tile_detached)

    # --- Host services ---

    @property
    def engine(self) -> TurnEngine:
        return self._engine

    @property
    def world(self) -> World:
        return self._engine.world

    @property
    def dispatcher(self) -> TriggerDispatcher:
        return self._dispatcher

    @property
    def grid(self) -> TileGrid:
        return self._grid

    @property
    def labels(self) -> LabelBoard:
        return self._labels

    @property
    def turn_number(self) -> int:
        return self._engine.clock.turn_number

    @property
    def closed(self) -> bool:
        return self._closed

    # --- Lifecycle ---

    def start(self) -> None:
        self._check_open()
        self._engine.start()
        logger.debug("session started on %dx%d grid", self._grid.width, self._grid.height)

    def close(self) -> None:
        """Despawn everything and detach every listener."""
        if self._closed:
            return
        world = self.world
        for eid in sorted(world.entities()):
            world.despawn(eid)
        self._dispatcher.clear()
        self._labels.clear()
        self._engine.stop()
        self._closed = True
        logger.debug("session closed after turn %d", self.turn_number)

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("GameSession is closed")

    # --- Spawning ---

    def add_propagator(self, region: Iterable[GridLocation]) -> EntityId:
        self._check_open()
        eid = self.world.spawn()
        self.world.attach(eid, FieldPropagator(region))
        return eid

    def place_tile(
        self,
        locations: Iterable[GridLocation],
        effects: Iterable[TileEffect] = (),
    ) -> EntityId:
        """Place a tile and activate its effects.

        Already-placed affecters learn about the newcomer through a
        PERSISTENT trigger over its footprint before the newcomer's own
        effects start listening, then those effects activate over their own
        area.

        Effects already bound to a tile, or destroyed, are rejected with
        RuntimeError before anything is spawned.
        """
        self._check_open()
        footprint = as_location_set(locations)
        tile_effects = list(effects)
        _check_unbound(tile_effects)
        world = self.world
        eid = world.spawn()
        try:
            self._grid.place(eid, footprint)
        except ValueError:
            world.despawn(eid)
            raise
        world.attach(eid, Tile(footprint))
        world.attach(eid, FieldStore())

        self._dispatcher.fire(TriggerPhase.PERSISTENT, eid, footprint)

        if tile_effects:
            world.attach(eid, TileEffects(tile_effects))
            for effect in tile_effects:
                effect.begin_play(self, eid)
            for effect in tile_effects:
                effect.activate_effect(TriggerPhase.PERSISTENT)
        return eid

    def destroy_tile(self, eid: EntityId) -> None:
        self.world.despawn(eid)

    def add_sink(
        self,
        eid: EntityId,
        data: ResourceSinkData | None = None,
        on_amount_changed: AmountCallback | None = None,
    ) -> ResourceSink:
        self._check_open()
        grid = self._grid

        def sink_locations() -> LocationSet:
            return grid.locations_of(eid) or NO_LOCATIONS

        sink = ResourceSink(
            data,
            owner=eid,
            world=self.world,
            on_amount_changed=on_amount_changed,
            locations_getter=sink_locations,
        )
        self.world.attach(eid, sink)
        sink.begin_play(self._dispatcher)
        return sink

    # --- Turn flow ---

    def end_turn(self) -> None:
        self._check_open()
        self._engine.end_turn()

    def trigger(
        self,
        phase: TriggerPhase,
        triggerer: EntityId | None = None,
        locations: Iterable[GridLocation] = NO_LOCATIONS,
    ) -> None:
        self._check_open()
        self._engine.step_phase(phase, triggerer, locations)

    # --- Queries ---

    def tile_strength(self, eid: EntityId, field_type: FieldType) -> int:
        return FieldHelper.strength(self.world.get(eid, FieldStore), field_type)

    def field_strength_at(self, location: GridLocation, field_type: FieldType) -> int:
        return field_strength_at(self.world, location, field_type)

    def effects_of(self, eid: EntityId) -> list[TileEffect]:
        if not self.world.has(eid, TileEffects):
            return []
        return list(self.world.get(eid, TileEffects).effects)

    def sinks_at(self, location: GridLocation) -> list[ResourceSink]:
        return [
            sink for _eid, (sink,) in self.world.query(ResourceSink)
            if location in sink.locations()
        ]

    # --- Teardown hooks ---

    def _on_effects_detached(self, world: World, eid: EntityId, component: TileEffects) -> None:
        for effect in component.effects:
            effect.destroy()

    def _on_sink_detached(self, world: World, eid: EntityId, sink: ResourceSink) -> None:
        sink.free_all()
        sink.end_play()

    def _on_tile_detached(self, world: World, eid: EntityId, component: Tile) -> None:
        self._grid.remove(eid)


def _check_unbound(effects: list[TileEffect]) -> None:
    seen: set[int] = set()
    for effect in effects:
        if effect.destroyed:
            raise RuntimeError(f"{effect!r} was already destroyed")
        if effect.host is not None or id(effect) in seen:
            raise RuntimeError(f"{effect!r} is already bound to a tile")
        seen.add(id(effect))
