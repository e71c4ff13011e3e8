"""FieldPropagator - region-wide field strength bookkeeping (ground plane)."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from turn.types import GridLocation, LocationSet, as_location_set
from turn_field.types import FieldType
from turn_spatial import expand_footprint

if TYPE_CHECKING:
    from turn import World


class FieldPropagator:
    """Owns per-location field strengths across a region of the grid.

    A propagator only ever touches locations inside its region. A call whose
    locations miss the region entirely is refused (returns False, no change),
    which is how callers find the propagator responsible for their tiles.
    """

    def __init__(self, region: Iterable[GridLocation]) -> None:
        self._region = as_location_set(region)
        if not self._region:
            raise ValueError("FieldPropagator region must be non-empty")
        self._strengths: dict[GridLocation, dict[FieldType, int]] = {}

    @classmethod
    def rectangle(
        cls, origin: GridLocation, dimensions: tuple[int, int]
    ) -> FieldPropagator:
        return cls(expand_footprint(origin, dimensions))

    @property
    def region(self) -> LocationSet:
        return self._region

    def covers(self, location: GridLocation) -> bool:
        return location in self._region

    def apply_field(self, field_type: FieldType, locations: Iterable[GridLocation]) -> bool:
        """Add one unit of *field_type* at every covered location.

        Returns True if this propagator owns any of *locations*.
        """
        owned = self._region & as_location_set(locations)
        if not owned:
            return False
        for location in owned:
            cell = self._strengths.setdefault(location, {})
            cell[field_type] = cell.get(field_type, 0) + 1
        return True

    def remove_field(self, field_type: FieldType, locations: Iterable[GridLocation]) -> bool:
        """Remove one unit of *field_type* at every covered location.

        Strength floors at zero. Returns True if this propagator owns any of
        *locations*.
        """
        owned = self._region & as_location_set(locations)
        if not owned:
            return False
        for location in owned:
            cell = self._strengths.get(location)
            if cell is None:
                continue
            remaining = cell.get(field_type, 0) - 1
            if remaining > 0:
                cell[field_type] = remaining
            else:
                cell.pop(field_type, None)
                if not cell:
                    del self._strengths[location]
        return True

    def strength(self, location: GridLocation, field_type: FieldType) -> int:
        cell = self._strengths.get(location)
        if cell is None:
            return 0
        return cell.get(field_type, 0)

    def strengths_at(self, location: GridLocation) -> dict[FieldType, int]:
        return dict(self._strengths.get(location, {}))

    def locations_with(self, field_type: FieldType) -> LocationSet:
        """Every location where *field_type* has non-zero strength."""
        return frozenset(
            loc for loc, cell in self._strengths.items() if field_type in cell
        )


def field_strength_at(world: World, location: GridLocation, field_type: FieldType) -> int:
    """Sum of *field_type* strength at *location* over every live propagator."""
    total = 0
    for _eid, (propagator,) in world.query(FieldPropagator):
        total += propagator.strength(location, field_type)
    return total
