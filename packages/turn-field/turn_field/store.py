"""FieldStore component and helper functions."""
from __future__ import annotations

from dataclasses import dataclass, field

from turn_field.types import FieldType


@dataclass
class FieldStore:
    """Per-tile accumulated field strengths.

    Attributes:
        strengths: Mapping of field type -> strength. Absent means zero.
    """

    strengths: dict[FieldType, int] = field(default_factory=dict)


class FieldHelper:
    """Pure functions for field store manipulation."""

    @staticmethod
    def apply(store: FieldStore, field_type: FieldType, amount: int = 1) -> int:
        """Add strength. Returns the new strength."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        new = store.strengths.get(field_type, 0) + amount
        if new:
            store.strengths[field_type] = new
        return new

    @staticmethod
    def remove(store: FieldStore, field_type: FieldType, amount: int = 1) -> int:
        """Remove strength, flooring at zero. Returns amount actually removed."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        current = store.strengths.get(field_type, 0)
        actual = min(amount, current)
        remaining = current - actual
        if remaining == 0:
            store.strengths.pop(field_type, None)
        else:
            store.strengths[field_type] = remaining
        return actual

    @staticmethod
    def strength(store: FieldStore, field_type: FieldType) -> int:
        return store.strengths.get(field_type, 0)

    @staticmethod
    def types(store: FieldStore) -> list[FieldType]:
        """Field types with non-zero strength."""
        return list(store.strengths.keys())

    @staticmethod
    def clear(store: FieldStore, field_type: FieldType | None = None) -> None:
        """Drop one field type, or everything if field_type is None."""
        if field_type is None:
            store.strengths.clear()
        else:
            store.strengths.pop(field_type, None)
