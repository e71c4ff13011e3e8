"""turn-field - Typed field strength for tiles and grid regions."""
from turn_field.propagator import FieldPropagator, field_strength_at
from turn_field.store import FieldHelper, FieldStore
from turn_field.types import FieldType

__all__ = [
    "FieldHelper",
    "FieldPropagator",
    "FieldStore",
    "FieldType",
    "field_strength_at",
]
