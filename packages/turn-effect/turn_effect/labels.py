"""LabelBoard - counted label annotations on grid locations."""
from __future__ import annotations

from collections import Counter
from typing import Iterable

from turn.types import GridLocation, LocationSet

TileLabel = str


class LabelBoard:
    """Tracks which labels sit on which locations.

    Labels are reference counted per location, so two effects labelling the
    same location with the same label need two removals to clear it.
    """

    def __init__(self) -> None:
        self._labels: dict[GridLocation, Counter[TileLabel]] = {}

    def add(self, label: TileLabel, locations: Iterable[GridLocation]) -> None:
        for location in locations:
            self._labels.setdefault(location, Counter())[label] += 1

    def remove(self, label: TileLabel, locations: Iterable[GridLocation]) -> None:
        for location in locations:
            counts = self._labels.get(location)
            if counts is None or counts[label] <= 0:
                continue
            counts[label] -= 1
            if counts[label] <= 0:
                del counts[label]
            if not counts:
                del self._labels[location]

    def labels_at(self, location: GridLocation) -> frozenset[TileLabel]:
        return frozenset(self._labels.get(location, ()))

    def count(self, label: TileLabel, location: GridLocation) -> int:
        counts = self._labels.get(location)
        return counts[label] if counts is not None else 0

    def locations_of(self, label: TileLabel) -> LocationSet:
        return frozenset(
            loc for loc, counts in self._labels.items() if counts[label] > 0
        )

    def clear(self) -> None:
        self._labels.clear()
