"""TileGrid - 2D integer grid of tiles that may span several locations."""
from __future__ import annotations

from typing import Iterable

from turn.types import EntityId, GridLocation, LocationSet, as_location_set
from turn_spatial.footprint import chebyshev_area


class TileGrid:
    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells: dict[GridLocation, set[EntityId]] = {}
        self._tiles: dict[EntityId, LocationSet] = {}

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, location: GridLocation) -> bool:
        x, y = location
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, locations: LocationSet) -> None:
        for location in locations:
            if not self.in_bounds(location):
                raise ValueError(
                    f"{location} out of bounds for {self._width}x{self._height} grid"
                )

    def place(self, eid: EntityId, locations: Iterable[GridLocation]) -> None:
        """Place a tile over *locations*, replacing any previous footprint."""
        footprint = as_location_set(locations)
        if not footprint:
            raise ValueError(f"Tile {eid} needs at least one location")
        self._check_bounds(footprint)
        self.remove(eid)
        self._tiles[eid] = footprint
        for location in footprint:
            self._cells.setdefault(location, set()).add(eid)

    def remove(self, eid: EntityId) -> None:
        footprint = self._tiles.pop(eid, None)
        if footprint is None:
            return
        for location in footprint:
            cell = self._cells.get(location)
            if cell is not None:
                cell.discard(eid)
                if not cell:
                    del self._cells[location]

    def at(self, location: GridLocation) -> frozenset[EntityId]:
        return frozenset(self._cells.get(location, ()))

    def tiles_at(self, locations: Iterable[GridLocation]) -> frozenset[EntityId]:
        """Every tile standing on at least one of *locations*."""
        found: set[EntityId] = set()
        for location in locations:
            found.update(self._cells.get(location, ()))
        return frozenset(found)

    def locations_of(self, eid: EntityId) -> LocationSet | None:
        return self._tiles.get(eid)

    def in_radius(self, locations: Iterable[GridLocation], r: int) -> LocationSet:
        """In-bounds locations within Chebyshev distance *r* of *locations*."""
        return frozenset(
            loc for loc in chebyshev_area(locations, r) if self.in_bounds(loc)
        )

    def neighbors(self, location: GridLocation) -> list[GridLocation]:
        x, y = location
        dirs = [
            (-1, -1), (-1, 0), (-1, 1),
            (0, -1),           (0, 1),
            (1, -1),  (1, 0),  (1, 1),
        ]
        result: list[GridLocation] = []
        for dx, dy in dirs:
            candidate = (x + dx, y + dy)
            if self.in_bounds(candidate):
                result.append(candidate)
        return result

    def tracked_tiles(self) -> frozenset[EntityId]:
        return frozenset(self._tiles)
