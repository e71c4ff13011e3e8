"""Footprint utilities - location math for multi-location tiles."""
from __future__ import annotations

from typing import Iterable

from turn.types import GridLocation, LocationSet


def expand_footprint(origin: GridLocation, dimensions: tuple[int, int]) -> LocationSet:
    """Expand a rectangular footprint from *origin* with *dimensions*.

    Returns every location in ``[origin, origin + dimensions)``.

    >>> sorted(expand_footprint((5, 3), (2, 2)))
    [(5, 3), (5, 4), (6, 3), (6, 4)]
    """
    width, height = dimensions
    if width < 1 or height < 1:
        raise ValueError(f"All dimensions must be >= 1, got {dimensions}")
    ox, oy = origin
    return frozenset(
        (ox + dx, oy + dy) for dx in range(width) for dy in range(height)
    )


def resolve_footprint(
    origin: GridLocation,
    shape: tuple[int, int] | Iterable[GridLocation],
) -> LocationSet:
    """Normalise either form to absolute locations.

    *shape* can be:
    - A dimensions tuple ``(w, h)`` -> rectangular expansion.
    - An iterable of relative offsets ``[(0, 0), (1, 0), ...]`` -> translated.
    """
    if isinstance(shape, tuple) and len(shape) == 2 and all(
        isinstance(d, int) for d in shape
    ):
        return expand_footprint(origin, shape)  # type: ignore[arg-type]
    ox, oy = origin
    return frozenset((ox + dx, oy + dy) for dx, dy in shape)  # type: ignore[misc]


def chebyshev_area(locations: Iterable[GridLocation], r: int) -> LocationSet:
    """All locations within Chebyshev distance *r* of any of *locations*."""
    if r < 0:
        raise ValueError(f"r must be >= 0, got {r}")
    result: set[GridLocation] = set()
    for x, y in locations:
        for dx in range(-r, r + 1):
            for dy in range(-r, r + 1):
                result.add((x + dx, y + dy))
    return frozenset(result)
