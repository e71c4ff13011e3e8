"""Garden -- protection fields and watered plants over a few turns.

Demonstrates:
- Creating a GameSession with a ground-plane field propagator
- Placing a tile with an ApplyField effect and watching neighbours pick it up
- A deferred resource sink realizing its increments at PLANTS_GROW
- Destroying a tile and the field disappearing with it

Run: python packages/turn-garden/examples/garden.py
"""

import logging

from turn_garden import (
    ApplyField,
    FieldType,
    GameSession,
    Resource,
    ResourceSinkData,
    ResourceType,
    TriggerPhase,
)

P = FieldType.PROTECTION


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    print("=== Garden ===\n")

    session = GameSession(6, 6)
    session.add_propagator([(x, y) for x in range(6) for y in range(6)])
    session.start()

    # A scarecrow protects everything within one tile of it.
    scarecrow = session.place_tile(
        [(2, 2)],
        [ApplyField([TriggerPhase.PERSISTENT], P, 1, effected_location_label="guarded")],
    )
    plant = session.place_tile([(3, 2)])
    print(f"  plant protection: {session.tile_strength(plant, P)}")

    sink = session.add_sink(
        plant,
        ResourceSinkData(
            deferred_increment=True,
            has_max_increments_per_turn=True,
            max_increments_per_turn=1,
            allocation_type=ResourceType.WATER,
        ),
        on_amount_changed=lambda amount: print(f"  plant growth -> {amount}"),
    )

    for _ in range(3):
        watered = sink.allocate(Resource(ResourceType.WATER))
        print(f"turn {session.turn_number + 1}: watered={watered}")
        session.end_turn()

    session.destroy_tile(scarecrow)
    print(f"\n  plant protection after scarecrow removed: {session.tile_strength(plant, P)}")
    print(f"  guarded locations: {sorted(session.labels.locations_of('guarded'))}")

    session.close()
    print(f"\nDone after turn {session.turn_number}.")


if __name__ == "__main__":
    main()
