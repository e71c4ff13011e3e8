"""TileEffect - a trigger-driven behaviour attached to one tile."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from turn.types import (
    NO_LOCATIONS,
    EntityId,
    GridLocation,
    LocationSet,
    TriggerPhase,
    as_location_set,
)
from turn_effect.labels import TileLabel
from turn_effect.types import EffectHost, EffectState

if TYPE_CHECKING:
    from turn_signal import ListenerHandle


class TileEffect:
    """A single way a tile affects the grid.

    An effect reacts only to the phases in ``triggers``. Every activation
    merges the affected locations into ``effected_locations``; ``unaffect``
    undoes all of them at once. Subclasses extend ``affect`` and ``unaffect``
    and must call the base implementation.

    Attributes:
        triggers: Phases that activate this effect.
        source_label: Label placed on the owner's locations while affected.
        effected_location_label: Label placed on each affected location.
        effected_locations: Running union of every location affected so far.
        state: Where the effect is in its idle/activating/affected cycle.
    """

    def __init__(
        self,
        triggers: Iterable[TriggerPhase],
        *,
        source_label: TileLabel | None = None,
        effected_location_label: TileLabel | None = None,
    ) -> None:
        self.triggers: frozenset[TriggerPhase] = frozenset(triggers)
        self.source_label = source_label
        self.effected_location_label = effected_location_label
        self.effected_locations: set[GridLocation] = set()
        self.state = EffectState.IDLE
        self._owner: EntityId | None = None
        self._host: EffectHost | None = None
        self._handle: ListenerHandle | None = None
        self._source_locations: LocationSet = NO_LOCATIONS
        self._labelled: set[GridLocation] = set()
        self._destroyed = False

    @property
    def owner(self) -> EntityId | None:
        return self._owner

    @property
    def host(self) -> EffectHost | None:
        return self._host

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # --- Lifecycle ---

    def begin_play(self, host: EffectHost, owner: EntityId) -> None:
        """Bind to a session and start listening for triggers."""
        if self._destroyed:
            raise RuntimeError(f"{type(self).__name__} was already destroyed")
        if self._host is not None:
            raise RuntimeError(f"{type(self).__name__} is already bound to tile {self._owner}")
        self._host = host
        self._owner = owner
        self._handle = host.dispatcher.subscribe(
            self.receive_trigger, name=f"{type(self).__name__}@{owner}"
        )

    def destroy(self) -> None:
        """Undo every contribution exactly once and stop listening."""
        if self._destroyed:
            return
        self._destroyed = True
        self.unaffect()
        if self._handle is not None and self._host is not None:
            self._host.dispatcher.unsubscribe(self._handle)
        self._handle = None

    # --- Triggering ---

    def receive_trigger(
        self,
        phase: TriggerPhase,
        triggerer: EntityId | None,
        locations: LocationSet,
    ) -> None:
        if self._destroyed:
            return
        self.activate_effect(phase, locations)

    def activate_effect(
        self, phase: TriggerPhase, locations: Iterable[GridLocation] = NO_LOCATIONS
    ) -> None:
        """Affect the resolved locations if *phase* is one of our triggers.

        Empty *locations* means the effect picks its own targets.
        """
        if phase not in self.triggers or self._destroyed:
            return
        self.state = EffectState.ACTIVATING
        try:
            targets = self.resolve_locations(as_location_set(locations))
            if targets:
                self.affect(targets)
        finally:
            self.state = EffectState.AFFECTED if self.effected_locations else EffectState.IDLE

    def resolve_locations(self, locations: LocationSet) -> LocationSet:
        """Locations an activation should affect. Unrestricted by default."""
        return locations

    # --- Affecting ---

    def affect(self, locations: LocationSet) -> None:
        new = locations - self.effected_locations
        self.effected_locations |= locations
        self.register_labels(new)

    def unaffect(self) -> None:
        self.unregister_labels(frozenset(self.effected_locations))
        self.effected_locations.clear()
        self.state = EffectState.IDLE

    # --- Labels ---

    def get_label_locations(self, locations: LocationSet) -> LocationSet:
        """Subset of *locations* that receives the effected-location label.

        Removal takes off exactly the locations labelled earlier, so an
        override need not give the same answer for the full effected set.
        """
        return locations

    def register_labels(self, locations: LocationSet) -> None:
        if self._host is None:
            return
        board = self._host.labels
        if self.source_label is not None and not self._source_locations:
            self._source_locations = self._owner_locations()
            board.add(self.source_label, self._source_locations)
        if self.effected_location_label is not None and locations:
            labelled = self.get_label_locations(locations) - self._labelled
            board.add(self.effected_location_label, labelled)
            self._labelled |= labelled

    def unregister_labels(self, locations: LocationSet) -> None:
        if self._host is None:
            return
        board = self._host.labels
        if self.source_label is not None and self._source_locations:
            board.remove(self.source_label, self._source_locations)
            self._source_locations = NO_LOCATIONS
        if self.effected_location_label is not None and locations:
            labelled = self._labelled & locations
            board.remove(self.effected_location_label, labelled)
            self._labelled -= labelled

    def _owner_locations(self) -> LocationSet:
        if self._host is None or self._owner is None:
            return NO_LOCATIONS
        return self._host.grid.locations_of(self._owner) or NO_LOCATIONS

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} owner={self._owner} state={self.state.name} "
            f"locations={len(self.effected_locations)}>"
        )
