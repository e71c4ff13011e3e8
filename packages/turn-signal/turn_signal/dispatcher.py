"""Synchronous trigger-phase broadcast channel with explicit listener handles."""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from turn.types import (
    NO_LOCATIONS,
    EntityId,
    GridLocation,
    LocationSet,
    TriggerPhase,
    as_location_set,
)

logger = logging.getLogger(__name__)

TriggerListener = Callable[[TriggerPhase, EntityId | None, LocationSet], None]


class ListenerHandle:
    """A subscription slot. Inactive handles are never delivered to."""

    __slots__ = ("listener", "name", "active")

    def __init__(self, listener: TriggerListener, name: str) -> None:
        self.listener = listener
        self.name = name
        self.active = True

    def __repr__(self) -> str:
        state = "active" if self.active else "detached"
        return f"<ListenerHandle {self.name} {state}>"


class TriggerDispatcher:
    """Delivers ``(phase, triggerer, locations)`` to every live listener.

    One dispatcher exists per game session. Delivery is synchronous and in
    subscription order, over a snapshot of the listeners taken when the
    broadcast starts. A listener detached during a broadcast is skipped for
    the rest of it. A listener that raises is logged and the broadcast
    carries on with the next one.
    """

    def __init__(self) -> None:
        self._handles: list[ListenerHandle] = []
        self._depth = 0
        self._faults = 0

    def subscribe(self, listener: TriggerListener, name: str | None = None) -> ListenerHandle:
        handle = ListenerHandle(listener, name or _describe(listener))
        self._handles.append(handle)
        return handle

    def unsubscribe(self, handle: ListenerHandle) -> None:
        handle.active = False
        try:
            self._handles.remove(handle)
        except ValueError:
            pass

    def fire(
        self,
        phase: TriggerPhase,
        triggerer: EntityId | None = None,
        locations: Iterable[GridLocation] = NO_LOCATIONS,
    ) -> None:
        locs = as_location_set(locations)
        snapshot = list(self._handles)
        self._depth += 1
        try:
            for handle in snapshot:
                if not handle.active:
                    continue
                try:
                    handle.listener(phase, triggerer, locs)
                except Exception:
                    self._faults += 1
                    logger.exception(
                        "Trigger listener %s failed on %s", handle.name, phase.name
                    )
        finally:
            self._depth -= 1

    @property
    def firing(self) -> bool:
        """True while a broadcast (possibly nested) is in progress."""
        return self._depth > 0

    @property
    def faults(self) -> int:
        """Number of listener exceptions isolated so far."""
        return self._faults

    def listener_count(self) -> int:
        return len(self._handles)

    def clear(self) -> None:
        for handle in self._handles:
            handle.active = False
        self._handles.clear()


def _describe(listener: TriggerListener) -> str:
    owner = getattr(listener, "__self__", None)
    name = getattr(listener, "__qualname__", None) or repr(listener)
    if owner is not None:
        return f"{name}@{id(owner):x}"
    return name
