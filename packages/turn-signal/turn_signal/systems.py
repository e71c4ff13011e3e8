"""System factories for trigger dispatch."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from turn_signal.dispatcher import TriggerDispatcher

if TYPE_CHECKING:
    from turn import TurnContext, World


def make_trigger_system(dispatcher: TriggerDispatcher) -> Callable[[World, TurnContext], None]:
    def trigger_system(world: World, ctx: TurnContext) -> None:
        dispatcher.fire(ctx.phase, ctx.triggerer, ctx.locations)

    return trigger_system
