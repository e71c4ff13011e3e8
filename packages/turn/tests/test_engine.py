"""Tests for TurnEngine phase ordering and lifecycle hooks."""

import pytest

from turn import TURN_PHASES, TriggerPhase, TurnEngine


def test_turn_phases_order():
    assert TURN_PHASES == (
        TriggerPhase.PLANT_ACTIVE,
        TriggerPhase.TRASH_DAMAGE,
        TriggerPhase.TRASH_ACTIVE,
        TriggerPhase.TRASH_SPREAD,
        TriggerPhase.PLANTS_GROW,
    )
    assert TriggerPhase.PERSISTENT not in TURN_PHASES


def test_end_turn_runs_systems_once_per_phase():
    engine = TurnEngine()
    seen = []
    engine.add_system(lambda world, ctx: seen.append((ctx.turn_number, ctx.phase)))

    engine.end_turn()

    assert seen == [(1, phase) for phase in TURN_PHASES]


def test_systems_run_in_registration_order():
    engine = TurnEngine(phases=[TriggerPhase.PLANT_ACTIVE])
    order = []
    engine.add_system(lambda w, c: order.append("a"))
    engine.add_system(lambda w, c: order.append("b"))

    engine.end_turn()

    assert order == ["a", "b"]


def test_run_counts_turns():
    engine = TurnEngine()
    engine.run(3)
    assert engine.clock.turn_number == 3


def test_request_stop_ends_cycle():
    engine = TurnEngine()
    seen = []

    def system(world, ctx):
        seen.append(ctx.phase)
        if ctx.phase is TriggerPhase.TRASH_DAMAGE:
            ctx.request_stop()

    engine.add_system(system)
    engine.run(5)

    assert seen == [TriggerPhase.PLANT_ACTIVE, TriggerPhase.TRASH_DAMAGE]
    assert engine.clock.turn_number == 1


def test_step_phase_passes_triggerer_and_locations():
    engine = TurnEngine()
    seen = []
    engine.add_system(lambda w, c: seen.append((c.phase, c.triggerer, c.locations)))

    engine.step_phase(TriggerPhase.PERSISTENT, 7, [(1, 2), (1, 2), (3, 4)])

    assert seen == [(TriggerPhase.PERSISTENT, 7, frozenset({(1, 2), (3, 4)}))]
    assert engine.clock.turn_number == 0


def test_clock_phase_visible_only_during_phase():
    engine = TurnEngine(phases=[TriggerPhase.PLANTS_GROW])
    during = []
    engine.add_system(lambda w, c: during.append(engine.clock.phase))

    engine.end_turn()

    assert during == [TriggerPhase.PLANTS_GROW]
    assert engine.clock.phase is None


def test_start_and_stop_hooks_fire_once():
    engine = TurnEngine()
    calls = []
    engine.on_start(lambda w, c: calls.append("start"))
    engine.on_stop(lambda w, c: calls.append("stop"))

    engine.start()
    engine.start()
    engine.run(1)
    engine.stop()
    engine.stop()

    assert calls == ["start", "stop"]
    assert not engine.started


def test_empty_phase_list_rejected():
    with pytest.raises(ValueError, match="phases must be non-empty"):
        TurnEngine(phases=[])


def test_stop_does_not_leak_into_later_phases():
    engine = TurnEngine()
    seen = []

    def stopper(world, ctx):
        if ctx.phase is TriggerPhase.TRASH_ACTIVE:
            ctx.request_stop()

    engine.add_system(stopper)
    engine.add_system(lambda w, c: seen.append(c.phase))

    engine.end_turn()
    seen.clear()
    engine.step_phase(TriggerPhase.PLANTS_GROW)

    assert seen == [TriggerPhase.PLANTS_GROW]


def test_stop_in_manual_phase_skips_remaining_systems_only():
    engine = TurnEngine()
    seen = []
    engine.add_system(lambda w, c: c.request_stop())
    engine.add_system(lambda w, c: seen.append(c.phase))

    engine.step_phase(TriggerPhase.PERSISTENT)
    engine.step_phase(TriggerPhase.PERSISTENT)

    assert seen == []


def test_next_turn_runs_after_stop():
    engine = TurnEngine()
    seen = []

    def system(world, ctx):
        seen.append((ctx.turn_number, ctx.phase))
        if ctx.turn_number == 1 and ctx.phase is TriggerPhase.PLANT_ACTIVE:
            ctx.request_stop()

    engine.add_system(system)
    engine.end_turn()
    engine.end_turn()

    assert seen == [(1, TriggerPhase.PLANT_ACTIVE)] + [(2, p) for p in TURN_PHASES]
