"""turn-spatial - Tile footprints and area queries for the turn engine."""
from __future__ import annotations

from turn.types import GridLocation, LocationSet
from turn_spatial.footprint import chebyshev_area, expand_footprint, resolve_footprint
from turn_spatial.grid import TileGrid

__all__ = [
    "GridLocation",
    "LocationSet",
    "TileGrid",
    "chebyshev_area",
    "expand_footprint",
    "resolve_footprint",
]
