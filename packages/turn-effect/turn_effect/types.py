"""Shared types and protocols for tile effects."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from turn import World
    from turn_effect.labels import LabelBoard
    from turn_signal import TriggerDispatcher
    from turn_spatial import TileGrid


class EffectState(Enum):
    IDLE = "idle"
    ACTIVATING = "activating"
    AFFECTED = "affected"


class EffectHost(Protocol):
    """Session-scoped services a tile effect is bound to at begin-play."""

    @property
    def world(self) -> World: ...
    @property
    def grid(self) -> TileGrid: ...
    @property
    def dispatcher(self) -> TriggerDispatcher: ...
    @property
    def labels(self) -> LabelBoard: ...
