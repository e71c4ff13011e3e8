"""TurnClock and TurnContext construction for the phase cycle."""

from typing import Callable

from turn.types import NO_LOCATIONS, EntityId, LocationSet, TriggerPhase, TurnContext


class TurnClock:
    def __init__(self) -> None:
        self._turn_number = 0
        self._phase: TriggerPhase | None = None

    @property
    def turn_number(self) -> int:
        return self._turn_number

    @property
    def phase(self) -> TriggerPhase | None:
        """The phase currently being processed, or None between phases."""
        return self._phase

    def advance(self) -> int:
        self._turn_number += 1
        return self._turn_number

    def enter(self, phase: TriggerPhase) -> None:
        self._phase = phase

    def leave(self) -> None:
        self._phase = None

    def context(
        self,
        phase: TriggerPhase,
        stop_fn: Callable[[], None],
        triggerer: EntityId | None = None,
        locations: LocationSet = NO_LOCATIONS,
    ) -> TurnContext:
        return TurnContext(
            turn_number=self._turn_number,
            phase=phase,
            triggerer=triggerer,
            locations=locations,
            request_stop=stop_fn,
        )

    def reset(self, turn_number: int = 0) -> None:
        self._turn_number = turn_number
        self._phase = None
