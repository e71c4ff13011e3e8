"""Core data types for fields."""
from __future__ import annotations

from enum import Enum


class FieldType(Enum):
    """A typed effect whose strength accumulates over tiles and locations."""

    PROTECTION = "protection"
    NUTRIENT = "nutrient"
