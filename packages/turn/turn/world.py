"""World - tiles, propagators and their components for one game session."""

from __future__ import annotations

from typing import Any, Callable, Iterator, TypeVar, cast

from turn.types import DeadEntityError, EntityId

T = TypeVar("T")

# Called as hook(world, entity_id, component).
HookCallback = Callable[["World", EntityId, Any], None]


class World:
    """Entity ids plus one component per type per entity.

    Attach and detach hooks are how session services learn about components
    coming and going. ``despawn`` marks the entity dead *before* its detach
    hooks run, so a hook can tell teardown from a plain detach with
    ``world.alive(eid)``.
    """

    def __init__(self) -> None:
        self._stores: dict[type, dict[EntityId, Any]] = {}
        self._living: set[EntityId] = set()
        self._last_id: EntityId = -1
        self._attach_hooks: dict[type, list[HookCallback]] = {}
        self._detach_hooks: dict[type, list[HookCallback]] = {}

    # --- Entities ---

    def spawn(self) -> EntityId:
        self._last_id += 1
        self._living.add(self._last_id)
        return self._last_id

    def despawn(self, entity_id: EntityId) -> None:
        """Kill an entity and detach every component it holds. Dead ids are ignored."""
        if entity_id not in self._living:
            return
        self._living.remove(entity_id)
        for ctype in list(self._stores):
            component = self._stores[ctype].pop(entity_id, None)
            if component is not None:
                self._run_hooks(self._detach_hooks, ctype, entity_id, component)

    def alive(self, entity_id: EntityId) -> bool:
        return entity_id in self._living

    def entities(self) -> frozenset[EntityId]:
        return frozenset(self._living)

    # --- Components ---

    def attach(self, entity_id: EntityId, component: Any) -> None:
        """Store *component* on the entity, replacing one of the same type."""
        ctype = type(component)
        if entity_id not in self._living:
            raise DeadEntityError(
                entity_id, f"Cannot attach {ctype.__name__} to dead entity {entity_id}"
            )
        self._stores.setdefault(ctype, {})[entity_id] = component
        self._run_hooks(self._attach_hooks, ctype, entity_id, component)

    def detach(self, entity_id: EntityId, component_type: type) -> None:
        component = self._stores.get(component_type, {}).pop(entity_id, None)
        if component is not None:
            self._run_hooks(self._detach_hooks, component_type, entity_id, component)

    def get(self, entity_id: EntityId, component_type: type[T]) -> T:
        if entity_id not in self._living:
            raise DeadEntityError(entity_id, f"Entity {entity_id} is not alive")
        try:
            return cast(T, self._stores[component_type][entity_id])
        except KeyError:
            raise KeyError(
                f"Entity {entity_id} has no {component_type.__name__} component"
            ) from None

    def has(self, entity_id: EntityId, component_type: type) -> bool:
        return (
            entity_id in self._living
            and entity_id in self._stores.get(component_type, {})
        )

    def query(self, *ctypes: type) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        """Yield ``(eid, components)`` for live entities holding every one of *ctypes*.

        Entities come out in spawn order, which makes "first match wins"
        lookups deterministic.
        """
        if not ctypes:
            return
        stores = [self._stores.get(ctype) for ctype in ctypes]
        if any(store is None for store in stores):
            return
        for eid in sorted(stores[0]):
            if eid in self._living and all(eid in store for store in stores[1:]):
                yield eid, tuple(store[eid] for store in stores)

    # --- Hooks ---

    def on_attach(self, ctype: type, callback: HookCallback) -> None:
        self._attach_hooks.setdefault(ctype, []).append(callback)

    def on_detach(self, ctype: type, callback: HookCallback) -> None:
        self._detach_hooks.setdefault(ctype, []).append(callback)

    def off_attach(self, ctype: type, callback: HookCallback) -> None:
        _discard(self._attach_hooks, ctype, callback)

    def off_detach(self, ctype: type, callback: HookCallback) -> None:
        _discard(self._detach_hooks, ctype, callback)

    def _run_hooks(
        self,
        hooks: dict[type, list[HookCallback]],
        ctype: type,
        entity_id: EntityId,
        component: Any,
    ) -> None:
        for callback in list(hooks.get(ctype, ())):
            callback(self, entity_id, component)


def _discard(hooks: dict[type, list[HookCallback]], ctype: type, callback: HookCallback) -> None:
    callbacks = hooks.get(ctype)
    if callbacks and callback in callbacks:
        callbacks.remove(callback)
