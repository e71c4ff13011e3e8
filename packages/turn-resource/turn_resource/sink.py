"""ResourceSink - turns allocated resources into a stored amount."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from turn.types import NO_LOCATIONS, EntityId, LocationSet, TriggerPhase
from turn_resource.resource import Resource
from turn_resource.types import ResourceSinkData, ResourceType

if TYPE_CHECKING:
    from turn import World
    from turn_signal import ListenerHandle, TriggerDispatcher

logger = logging.getLogger(__name__)

AmountCallback = Callable[[int], None]


class ResourceSink:
    """Accumulates an amount from allocated resources.

    Two caps bound allocation: total concurrent allocations and allocations
    per turn. In deferred mode each allocation only bumps a per-turn counter;
    the counter is realized into the amount, and reset, when the configured
    increment trigger fires.

    Amount changes reach the outside two ways: ``on_amount_changed`` pushes
    the new amount to the owner (skipped once the owner entity is dead), and
    every ``subscribe_amount`` listener receives a broadcast.
    """

    def __init__(
        self,
        data: ResourceSinkData | None = None,
        *,
        owner: EntityId | None = None,
        world: World | None = None,
        on_amount_changed: AmountCallback | None = None,
        locations_getter: Callable[[], LocationSet] | None = None,
    ) -> None:
        self.data = data if data is not None else ResourceSinkData()
        self.owner = owner
        self.on_amount_changed = on_amount_changed
        self._world = world
        self._locations_getter = locations_getter
        self._amount = self.data.initial_value
        self._allocated: dict[Resource, None] = {}
        self._forced: set[Resource] = set()
        self._increments_this_turn = 0
        self._listeners: list[AmountCallback] = []
        self._dispatcher: TriggerDispatcher | None = None
        self._handle: ListenerHandle | None = None

    # --- Queries ---

    @property
    def amount(self) -> int:
        """Realized amount."""
        return self._amount

    @property
    def projected_amount(self) -> int:
        """Realized amount plus increments still waiting for their trigger."""
        return self._amount + self._increments_this_turn * self.data.increment_per_resource

    @property
    def increments_this_turn(self) -> int:
        return self._increments_this_turn

    @property
    def allocated_resources(self) -> tuple[Resource, ...]:
        return tuple(self._allocated)

    @property
    def required_type(self) -> ResourceType:
        return self.data.allocation_type

    def holds(self, resource: Resource) -> bool:
        return resource in self._allocated

    def locations(self) -> LocationSet:
        if self._locations_getter is None:
            return NO_LOCATIONS
        return self._locations_getter()

    def owner_valid(self) -> bool:
        if self.owner is None or self._world is None:
            return True
        return self._world.alive(self.owner)

    # --- Lifecycle ---

    def begin_play(self, dispatcher: TriggerDispatcher) -> None:
        """Listen for turn triggers and push the initial value to the owner."""
        if self._handle is not None:
            return
        self._dispatcher = dispatcher
        self._handle = dispatcher.subscribe(
            self.receive_trigger, name=f"ResourceSink@{self.owner}"
        )
        self._push(self.data.initial_value)

    def end_play(self) -> None:
        if self._dispatcher is not None and self._handle is not None:
            self._dispatcher.unsubscribe(self._handle)
        self._handle = None
        self._dispatcher = None

    # --- Amount ---

    def set_amount(self, amount: int) -> None:
        """Store *amount*, push it to the owner and broadcast it."""
        self._push(amount)
        self._broadcast(amount)

    def subscribe_amount(self, listener: AmountCallback) -> None:
        self._listeners.append(listener)

    def unsubscribe_amount(self, listener: AmountCallback) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _push(self, amount: int) -> None:
        self._amount = amount
        if self.on_amount_changed is not None and self.owner_valid():
            self.on_amount_changed(amount)

    def _broadcast(self, amount: int) -> None:
        for listener in list(self._listeners):
            listener(amount)

    # --- Allocation ---

    def can_allocate(self, resource: Resource | None) -> bool:
        if resource is None:
            return False
        if resource.sink is not None:
            return False
        if self.data.has_max_increments and len(self._allocated) >= self.data.max_increments:
            return False
        if (
            self.data.has_max_increments_per_turn
            and self._increments_this_turn >= self.data.max_increments_per_turn
        ):
            return False
        return resource.resource_type.matches(self.required_type)

    def allocate(self, resource: Resource | None, force: bool = False) -> bool:
        """Allocate *resource* here. Returns False when validation fails.

        ``force`` skips the caps and the type check, and also skips all
        accounting: the resource is held but neither the amount nor the
        per-turn counter changes, now or when it is freed.
        """
        if resource is None:
            return False
        if not force and not self.can_allocate(resource):
            return False
        if resource.sink is not None and resource.sink is not self:
            return False
        if resource in self._allocated:
            return False

        resource.allocate(self, self.data.allocation_type)
        self._allocated[resource] = None

        if force:
            self._forced.add(resource)
            return True

        if self.data.deferred_increment:
            self._increments_this_turn += 1
            self._broadcast(self._amount)
        else:
            new_amount = self._amount + self.data.increment_per_resource
            self._push(new_amount)
            self._broadcast(new_amount)
        return True

    def free(self, resource: Resource) -> bool:
        """Release *resource*, undoing its contribution.

        An increment still pending this turn is cancelled before the realized
        amount is reduced. Returns False, logs a warning and changes nothing
        if *resource* is not held here.
        """
        if resource not in self._allocated:
            logger.warning("Sink %s cannot free %r: not allocated here", self.owner, resource)
            return False

        resource.free()
        del self._allocated[resource]

        if resource in self._forced:
            self._forced.discard(resource)
            return True

        if self._increments_this_turn:
            self._increments_this_turn -= 1
            self._broadcast(self._amount)
        else:
            new_amount = self._amount - self.data.increment_per_resource
            self._push(new_amount)
            self._broadcast(new_amount)
        return True

    def free_all(self) -> None:
        for resource in list(self._allocated):
            self.free(resource)

    # --- Triggers ---

    def receive_trigger(
        self,
        phase: TriggerPhase,
        triggerer: EntityId | None,
        locations: LocationSet,
    ) -> None:
        if self.data.deferred_increment and phase is self.data.increment_trigger:
            new_amount = self._amount + self._increments_this_turn * self.data.increment_per_resource
            self._increments_this_turn = 0
            self._push(new_amount)
            self._broadcast(new_amount)
