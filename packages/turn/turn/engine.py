"""TurnEngine - ordered phase cycle and session lifecycle hooks."""

from typing import Callable, Iterable

from turn.clock import TurnClock
from turn.types import (
    NO_LOCATIONS,
    TURN_PHASES,
    EntityId,
    GridLocation,
    System,
    TriggerPhase,
    TurnContext,
    as_location_set,
)
from turn.world import World

_Hook = Callable[[World, TurnContext], None]


class TurnEngine:
    """Runs every system once per phase, phases in ``TURN_PHASES`` order."""

    def __init__(self, phases: Iterable[TriggerPhase] = TURN_PHASES) -> None:
        self._phases = tuple(phases)
        if not self._phases:
            raise ValueError("phases must be non-empty")
        self._clock = TurnClock()
        self._world = World()
        self._systems: list[System] = []
        self._start_hooks: list[_Hook] = []
        self._stop_hooks: list[_Hook] = []
        self._stop_requested: bool = False
        self._started: bool = False

    @property
    def world(self) -> World:
        return self._world

    @property
    def clock(self) -> TurnClock:
        return self._clock

    @property
    def phases(self) -> tuple[TriggerPhase, ...]:
        return self._phases

    @property
    def started(self) -> bool:
        return self._started

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: _Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: _Hook) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        ctx = self._clock.context(TriggerPhase.PERSISTENT, self._request_stop)
        for hook in self._start_hooks:
            hook(self._world, ctx)

    def stop(self) -> None:
        if not self._started:
            return
        self._started = False
        ctx = self._clock.context(TriggerPhase.PERSISTENT, self._request_stop)
        for hook in self._stop_hooks:
            hook(self._world, ctx)

    def step_phase(
        self,
        phase: TriggerPhase,
        triggerer: EntityId | None = None,
        locations: Iterable[GridLocation] = NO_LOCATIONS,
    ) -> None:
        """Run all systems for a single phase without advancing the turn.

        A stop requested in an earlier phase does not carry over; one
        requested here stays visible to the caller until the next phase.
        """
        self._stop_requested = False
        ctx = self._clock.context(
            phase, self._request_stop, triggerer, as_location_set(locations)
        )
        self._clock.enter(phase)
        try:
            for system in self._systems:
                system(self._world, ctx)
                if self._stop_requested:
                    break
        finally:
            self._clock.leave()

    def end_turn(self) -> None:
        """Advance the turn counter and run the full phase cycle."""
        self._stop_requested = False
        self._clock.advance()
        for phase in self._phases:
            self.step_phase(phase)
            if self._stop_requested:
                break

    def run(self, n: int) -> None:
        self.start()
        self._stop_requested = False
        for _ in range(n):
            self.end_turn()
            if self._stop_requested:
                break
