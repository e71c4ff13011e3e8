"""turn-effect - Trigger-driven tile effects for the turn engine."""
from __future__ import annotations

from turn_effect.apply_field import ApplyField
from turn_effect.area import AreaEffect
from turn_effect.base import TileEffect
from turn_effect.labels import LabelBoard, TileLabel
from turn_effect.types import EffectHost, EffectState

__all__ = [
    "ApplyField",
    "AreaEffect",
    "EffectHost",
    "EffectState",
    "LabelBoard",
    "TileEffect",
    "TileLabel",
]
