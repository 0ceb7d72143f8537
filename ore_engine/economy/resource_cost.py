"""
Ore as a currency.

Some purchases (ship classes, upgrades) cost mined ore on top of credits. The
whole fleet's holds count towards the bill.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ore_engine.catalog.ores import find_ore
from ore_engine.models.ship import Ship

logger = logging.getLogger(__name__)


@dataclass
class ResourceShortfall:
    ore_id: str
    name: str
    required: int
    available: int

    @property
    def missing(self) -> int:
        return self.required - self.available


def fleet_ore_total(fleet: Iterable[Ship], ore_id: str) -> int:
    return sum(ship.cargo_quantity(ore_id) for ship in fleet)


def check_resource_cost(fleet: Iterable[Ship], required: Mapping[str, int]) -> list[ResourceShortfall]:
    """Shortfalls for every ore the fleet cannot cover. Empty means affordable."""
    ships = list(fleet)
    shortfalls: list[ResourceShortfall] = []
    for ore_id, amount in required.items():
        available = fleet_ore_total(ships, ore_id)
        if available < amount:
            ore = find_ore(ore_id)
            shortfalls.append(
                ResourceShortfall(
                    ore_id=ore_id,
                    name=ore.name if ore else ore_id,
                    required=amount,
                    available=available,
                )
            )
    return shortfalls


def can_afford_resources(fleet: Iterable[Ship], required: Mapping[str, int]) -> bool:
    return not check_resource_cost(fleet, required)


def deduct_resource_cost(fleet: Iterable[Ship], required: Mapping[str, int]) -> None:
    """
    Drain the required ore from the fleet, ship by ship in fleet order.

    Affordability must already have been confirmed with check_resource_cost.
    """
    ships = list(fleet)
    assert can_afford_resources(ships, required), "resource cost deducted without a prior check"
    for ore_id, amount in required.items():
        remaining = amount
        for ship in ships:
            if remaining <= 0:
                break
            held = ship.cargo_quantity(ore_id)
            if held <= 0:
                continue
            taken = min(held, remaining)
            cargo = dict(ship.ore_cargo or {})
            if held - taken > 0:
                cargo[ore_id] = held - taken
            else:
                cargo.pop(ore_id, None)
            ship.ore_cargo = cargo
            remaining -= taken
        logger.info("Deducted %d %s from fleet", amount - remaining, ore_id)


def format_resource_cost(required: Mapping[str, int]) -> list[dict]:
    """Display rows, e.g. [{"ore_id": "titanium_ore", "amount": 200, "name": "Titanium Ore", ...}]."""
    rows = []
    for ore_id, amount in required.items():
        ore = find_ore(ore_id)
        rows.append({
            "ore_id": ore_id,
            "amount": amount,
            "name": ore.name if ore else ore_id,
            "icon": ore.icon if ore else "",
        })
    return rows
