"""turn-signal - Trigger-phase broadcast for the turn engine."""
from __future__ import annotations

from turn_signal.dispatcher import ListenerHandle, TriggerDispatcher, TriggerListener
from turn_signal.systems import make_trigger_system

__all__ = ["ListenerHandle", "TriggerDispatcher", "TriggerListener", "make_trigger_system"]
