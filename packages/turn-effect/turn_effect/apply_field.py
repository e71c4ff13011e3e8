"""ApplyField - applies a field over the affected area."""
from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from turn.types import EntityId, GridLocation, LocationSet, TriggerPhase
from turn_effect.area import AreaEffect
from turn_effect.labels import TileLabel
from turn_field import FieldHelper, FieldPropagator, FieldStore, FieldType

logger = logging.getLogger(__name__)


class ApplyField(AreaEffect):
    """Adds ``field_type`` strength to affected locations and tiles.

    Locations go through a field propagator found lazily: until one accepts
    a call every live propagator is tried in spawn order, and the first to
    accept is remembered. With no propagator yet the call does nothing and
    the next call searches again. Removal only reverses units this effect
    actually put into a propagator.
    """

    def __init__(
        self,
        triggers: Iterable[TriggerPhase],
        field_type: FieldType = FieldType.PROTECTION,
        range: int = 1,
        *,
        source_label: TileLabel | None = None,
        effected_location_label: TileLabel | None = None,
    ) -> None:
        super().__init__(
            triggers,
            range,
            source_label=source_label,
            effected_location_label=effected_location_label,
        )
        self.field_type = field_type
        self._propagators: list[tuple[EntityId, FieldPropagator]] = []
        self._applied: Counter[tuple[EntityId, GridLocation]] = Counter()

    @property
    def bound_propagators(self) -> list[FieldPropagator]:
        return [prop for _eid, prop in self._propagators]

    def affect_locations(self, locations: LocationSet, affecter: EntityId | None) -> None:
        self._through_propagators(locations, remove=False)

    def unaffect_locations(self, locations: LocationSet, affecter: EntityId | None) -> None:
        self._through_propagators(locations, remove=True)

    def unaffect(self) -> None:
        super().unaffect()
        self._applied.clear()

    def affect_tiles(self, tiles: frozenset[EntityId], affecter: EntityId | None) -> None:
        world = self.host.world if self.host is not None else None
        if world is None:
            return
        for eid in tiles:
            if world.has(eid, FieldStore):
                FieldHelper.apply(world.get(eid, FieldStore), self.field_type)

    def unaffect_tiles(self, tiles: frozenset[EntityId], affecter: EntityId | None) -> None:
        world = self.host.world if self.host is not None else None
        if world is None:
            return
        for eid in tiles:
            if world.has(eid, FieldStore):
                FieldHelper.remove(world.get(eid, FieldStore), self.field_type)

    def _through_propagators(self, locations: LocationSet, remove: bool) -> None:
        host = self.host
        if host is None:
            return
        world = host.world
        self._propagators = [
            (eid, prop) for eid, prop in self._propagators if world.alive(eid)
        ]
        if remove:
            for eid, prop in self._propagators:
                owned = frozenset(loc for loc in locations if self._applied[(eid, loc)] > 0)
                if prop.remove_field(self.field_type, owned):
                    for loc in owned:
                        key = (eid, loc)
                        self._applied[key] -= 1
                        if self._applied[key] <= 0:
                            del self._applied[key]
            return

        if not self._propagators:
            for eid, (prop,) in world.query(FieldPropagator):
                if prop.apply_field(self.field_type, locations):
                    self._propagators.append((eid, prop))
                    self._record(eid, prop, locations)
                    logger.debug(
                        "%s on tile %s bound to propagator %s",
                        self.field_type.name, self.owner, eid,
                    )
                    return
            return
        for eid, prop in self._propagators:
            if prop.apply_field(self.field_type, locations):
                self._record(eid, prop, locations)

    def _record(self, eid: EntityId, prop: FieldPropagator, locations: LocationSet) -> None:
        self._applied.update((eid, loc) for loc in locations & prop.region)
