from __future__ import annotations

from dataclasses import dataclass, field

from turn.types import LocationSet
from turn_effect import TileEffect


@dataclass
class Tile:
    locations: LocationSet


@dataclass
class TileEffects:
    effects: list[TileEffect] = field(default_factory=list)
