from __future__ import annotations

from collections.abc import Callable

from ore_engine.catalog.ores import find_ore
from ore_engine.models.ship import Ship


def ore_cargo_weight(ship: Ship) -> float:
    weight = 0.0
    for ore_id, quantity in (ship.ore_cargo or {}).items():
        ore = find_ore(ore_id)
        if ore is not None:
            weight += ore.weight_per_unit * quantity
    return weight


def non_ore_cargo_weight(ship: Ship) -> float:
    return float(ship.non_ore_cargo_kg or 0.0)


def remaining_ore_capacity(
    ship: Ship, non_ore_weight: Callable[[Ship], float] = non_ore_cargo_weight,
) -> float:
    """Hold space (kg) still free for ore, after whatever non-ore cargo weighs."""
    capacity = float(ship.cargo_capacity_kg or 0.0)
    return max(0.0, capacity - non_ore_weight(ship) - ore_cargo_weight(ship))
