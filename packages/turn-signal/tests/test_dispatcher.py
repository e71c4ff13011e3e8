"""Unit tests for TriggerDispatcher."""
from __future__ import annotations

import logging

from turn import TriggerPhase
from turn_signal import TriggerDispatcher


def test_subscribe_and_fire():
    """Fire delivers phase, triggerer and locations synchronously."""
    dispatcher = TriggerDispatcher()
    received = []

    def listener(phase, triggerer, locations):
        received.append((phase, triggerer, locations))

    dispatcher.subscribe(listener)
    dispatcher.fire(TriggerPhase.PLANT_ACTIVE, 3, [(0, 0), (1, 0)])

    assert received == [(TriggerPhase.PLANT_ACTIVE, 3, frozenset({(0, 0), (1, 0)}))]


def test_fire_defaults():
    """Fire without triggerer or locations passes None and an empty set."""
    dispatcher = TriggerDispatcher()
    received = []
    dispatcher.subscribe(lambda p, t, l: received.append((t, l)))

    dispatcher.fire(TriggerPhase.PLANTS_GROW)

    assert received == [(None, frozenset())]


def test_fire_without_listeners():
    dispatcher = TriggerDispatcher()
    dispatcher.fire(TriggerPhase.TRASH_SPREAD)  # Should not raise


def test_subscription_order():
    """Listeners are called in subscription order."""
    dispatcher = TriggerDispatcher()
    order = []
    dispatcher.subscribe(lambda p, t, l: order.append("a"))
    dispatcher.subscribe(lambda p, t, l: order.append("b"))
    dispatcher.subscribe(lambda p, t, l: order.append("c"))

    dispatcher.fire(TriggerPhase.TRASH_ACTIVE)

    assert order == ["a", "b", "c"]


def test_unsubscribe():
    dispatcher = TriggerDispatcher()
    received = []
    handle = dispatcher.subscribe(lambda p, t, l: received.append(p))

    dispatcher.unsubscribe(handle)
    dispatcher.unsubscribe(handle)  # idempotent
    dispatcher.fire(TriggerPhase.TRASH_ACTIVE)

    assert received == []
    assert not handle.active
    assert dispatcher.listener_count() == 0


def test_listener_detached_mid_broadcast_is_skipped():
    """A listener unsubscribed by an earlier listener does not get the event."""
    dispatcher = TriggerDispatcher()
    received = []
    handles = {}

    def killer(phase, triggerer, locations):
        received.append("killer")
        dispatcher.unsubscribe(handles["victim"])

    dispatcher.subscribe(killer)
    handles["victim"] = dispatcher.subscribe(lambda p, t, l: received.append("victim"))

    dispatcher.fire(TriggerPhase.PLANT_ACTIVE)

    assert received == ["killer"]


def test_listener_added_mid_broadcast_waits_for_next_fire():
    """The listener set is a snapshot taken when the broadcast starts."""
    dispatcher = TriggerDispatcher()
    received = []

    def late(phase, triggerer, locations):
        received.append("late")

    def adder(phase, triggerer, locations):
        received.append("adder")
        if dispatcher.listener_count() == 1:
            dispatcher.subscribe(late)

    dispatcher.subscribe(adder)
    dispatcher.fire(TriggerPhase.PLANT_ACTIVE)
    assert received == ["adder"]

    dispatcher.fire(TriggerPhase.PLANT_ACTIVE)
    assert received == ["adder", "adder", "late"]


def test_faulty_listener_does_not_block_others(caplog):
    dispatcher = TriggerDispatcher()
    received = []

    def broken(phase, triggerer, locations):
        raise RuntimeError("boom")

    dispatcher.subscribe(broken, name="broken")
    dispatcher.subscribe(lambda p, t, l: received.append(p))

    with caplog.at_level(logging.ERROR, logger="turn_signal.dispatcher"):
        dispatcher.fire(TriggerPhase.TRASH_DAMAGE)

    assert received == [TriggerPhase.TRASH_DAMAGE]
    assert dispatcher.faults == 1
    assert "broken" in caplog.text
    assert "TRASH_DAMAGE" in caplog.text


def test_nested_fire():
    """A listener may fire another phase; it completes before the outer one continues."""
    dispatcher = TriggerDispatcher()
    order = []

    def chain(phase, triggerer, locations):
        order.append(("chain", phase))
        if phase is TriggerPhase.PLANT_ACTIVE:
            assert dispatcher.firing
            dispatcher.fire(TriggerPhase.PERSISTENT)

    dispatcher.subscribe(chain)
    dispatcher.subscribe(lambda p, t, l: order.append(("tail", p)))

    dispatcher.fire(TriggerPhase.PLANT_ACTIVE)

    assert order == [
        ("chain", TriggerPhase.PLANT_ACTIVE),
        ("chain", TriggerPhase.PERSISTENT),
        ("tail", TriggerPhase.PERSISTENT),
        ("tail", TriggerPhase.PLANT_ACTIVE),
    ]
    assert not dispatcher.firing


def test_clear_detaches_everything():
    dispatcher = TriggerDispatcher()
    handle = dispatcher.subscribe(lambda p, t, l: None)
    dispatcher.clear()
    assert dispatcher.listener_count() == 0
    assert not handle.active


def test_handle_name_defaults_to_qualname():
    dispatcher = TriggerDispatcher()

    def my_listener(phase, triggerer, locations):
        pass

    handle = dispatcher.subscribe(my_listener)
    assert "my_listener" in handle.name
