"""Tests for World entity storage, queries and detach hooks."""

from dataclasses import dataclass

import pytest

from turn.types import DeadEntityError
from turn.world import World


@dataclass
class Position:
    x: int
    y: int


@dataclass
class Health:
    hp: int


class TestSpawnDespawn:
    def test_spawn_returns_increasing_ids(self):
        world = World()
        assert [world.spawn() for _ in range(3)] == [0, 1, 2]

    def test_despawn_kills_entity(self):
        world = World()
        eid = world.spawn()
        world.despawn(eid)
        assert not world.alive(eid)
        assert eid not in world.entities()

    def test_despawn_twice_is_noop(self):
        world = World()
        eid = world.spawn()
        calls = []
        world.on_detach(Health, lambda w, e, c: calls.append(e))
        world.attach(eid, Health(5))
        world.despawn(eid)
        world.despawn(eid)
        assert calls == [eid]


class TestComponents:
    def test_attach_and_get(self):
        world = World()
        eid = world.spawn()
        world.attach(eid, Position(1, 2))
        assert world.get(eid, Position) == Position(1, 2)
        assert world.has(eid, Position)

    def test_attach_to_dead_entity_raises(self):
        world = World()
        eid = world.spawn()
        world.despawn(eid)
        with pytest.raises(DeadEntityError):
            world.attach(eid, Position(0, 0))

    def test_get_missing_component_raises_key_error(self):
        world = World()
        eid = world.spawn()
        with pytest.raises(KeyError, match="has no Position"):
            world.get(eid, Position)

    def test_get_from_dead_entity_raises(self):
        world = World()
        eid = world.spawn()
        world.attach(eid, Position(0, 0))
        world.despawn(eid)
        with pytest.raises(DeadEntityError):
            world.get(eid, Position)

    def test_detach_removes_component(self):
        world = World()
        eid = world.spawn()
        world.attach(eid, Position(0, 0))
        world.detach(eid, Position)
        assert not world.has(eid, Position)


class TestQuery:
    def test_query_requires_all_types(self):
        world = World()
        a = world.spawn()
        b = world.spawn()
        world.attach(a, Position(0, 0))
        world.attach(a, Health(3))
        world.attach(b, Position(1, 1))
        result = list(world.query(Position, Health))
        assert result == [(a, (Position(0, 0), Health(3)))]

    def test_query_in_spawn_order(self):
        world = World()
        eids = [world.spawn() for _ in range(4)]
        for eid in reversed(eids):
            world.attach(eid, Health(eid))
        assert [eid for eid, _ in world.query(Health)] == eids

    def test_query_skips_dead(self):
        world = World()
        a = world.spawn()
        b = world.spawn()
        world.attach(a, Health(1))
        world.attach(b, Health(2))
        world.despawn(a)
        assert [eid for eid, _ in world.query(Health)] == [b]

    def test_query_without_types_yields_nothing(self):
        world = World()
        world.attach(world.spawn(), Health(1))
        assert list(world.query()) == []


class TestHooks:
    def test_on_attach_fires(self):
        world = World()
        eid = world.spawn()
        calls = []
        world.on_attach(Position, lambda w, e, c: calls.append((e, c)))
        pos = Position(3, 4)
        world.attach(eid, pos)
        assert calls == [(eid, pos)]

    def test_detach_hook_sees_dead_entity_on_despawn(self):
        world = World()
        eid = world.spawn()
        seen = []
        world.on_detach(Position, lambda w, e, c: seen.append(w.alive(e)))
        world.attach(eid, Position(0, 0))
        world.despawn(eid)
        assert seen == [False]

    def test_detach_hook_sees_live_entity_on_detach(self):
        world = World()
        eid = world.spawn()
        seen = []
        world.on_detach(Position, lambda w, e, c: seen.append(w.alive(e)))
        world.attach(eid, Position(0, 0))
        world.detach(eid, Position)
        assert seen == [True]

    def test_off_detach(self):
        world = World()
        eid = world.spawn()
        calls = []

        def hook(w, e, c):
            calls.append(e)

        world.on_detach(Position, hook)
        world.off_detach(Position, hook)
        world.off_detach(Position, hook)  # second removal is harmless
        world.attach(eid, Position(0, 0))
        world.despawn(eid)
        assert calls == []

    def test_off_attach(self):
        world = World()
        calls = []

        def hook(w, e, c):
            calls.append(e)

        world.on_attach(Position, hook)
        first = world.spawn()
        world.attach(first, Position(0, 0))
        world.off_attach(Position, hook)
        world.off_attach(Position, hook)  # second removal is harmless
        world.attach(world.spawn(), Position(1, 1))
        assert calls == [first]
