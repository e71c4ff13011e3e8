"""AreaEffect - tile effects that reach every location within a range."""
from __future__ import annotations

from collections import Counter
from typing import Iterable

from turn.types import NO_LOCATIONS, EntityId, GridLocation, LocationSet, TriggerPhase
from turn_effect.base import TileEffect
from turn_effect.labels import TileLabel


class AreaEffect(TileEffect):
    """Affects locations around the owning tile, and the tiles standing there.

    Variants override the four ``affect_*``/``unaffect_*`` hooks. Each
    activation applies once per call, so the number of applications per
    location and per tile is counted; ``unaffect`` reverses those counts
    exactly, regardless of which tiles stand on the locations by then.
    """

    def __init__(
        self,
        triggers: Iterable[TriggerPhase],
        range: int = 1,
        *,
        source_label: TileLabel | None = None,
        effected_location_label: TileLabel | None = None,
    ) -> None:
        if range < 0:
            raise ValueError(f"range must be >= 0, got {range}")
        super().__init__(
            triggers,
            source_label=source_label,
            effected_location_label=effected_location_label,
        )
        self.range = range
        self._location_hits: Counter[GridLocation] = Counter()
        self._tile_hits: Counter[EntityId] = Counter()

    def area(self) -> LocationSet:
        """Every in-bounds location within ``range`` of the owner."""
        host = self.host
        if host is None or self.owner is None:
            return NO_LOCATIONS
        footprint = host.grid.locations_of(self.owner)
        if not footprint:
            return NO_LOCATIONS
        return host.grid.in_radius(footprint, self.range)

    def resolve_locations(self, locations: LocationSet) -> LocationSet:
        area = self.area()
        if not locations:
            return area
        return locations & area

    def affect(self, locations: LocationSet) -> None:
        super().affect(locations)
        self._location_hits.update(locations)
        self.affect_locations(locations, self.owner)
        host = self.host
        if host is not None:
            tiles = host.grid.tiles_at(locations)
            self._tile_hits.update(tiles)
            self.affect_tiles(tiles, self.owner)

    def unaffect(self) -> None:
        for layer in _layers(self._location_hits):
            self.unaffect_locations(layer, self.owner)
        host = self.host
        for layer in _layers(self._tile_hits):
            if host is not None:
                layer = frozenset(eid for eid in layer if host.world.alive(eid))
            if layer:
                self.unaffect_tiles(layer, self.owner)
        self._location_hits.clear()
        self._tile_hits.clear()
        super().unaffect()

    # --- Variant hooks ---

    def affect_locations(self, locations: LocationSet, affecter: EntityId | None) -> None:
        pass

    def unaffect_locations(self, locations: LocationSet, affecter: EntityId | None) -> None:
        pass

    def affect_tiles(self, tiles: frozenset[EntityId], affecter: EntityId | None) -> None:
        pass

    def unaffect_tiles(self, tiles: frozenset[EntityId], affecter: EntityId | None) -> None:
        pass


def _layers(hits: Counter) -> list[frozenset]:
    """Split a hit counter into sets: everything hit >= 1 time, >= 2 times, ..."""
    if not hits:
        return []
    return [
        frozenset(key for key, n in hits.items() if n >= level)
        for level in range(1, max(hits.values()) + 1)
    ]
