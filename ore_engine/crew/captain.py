"""
Captain command bonuses.

The captain's skills give ship-wide multipliers on the ship they are aboard.
Ships without the captain fall back to an acting commander (highest commerce
crew member), who commands sales but grants no mining bonus.
"""

from __future__ import annotations

from ore_engine.models.crew import CrewMember
from ore_engine.models.ship import Ship

FLEET_AURA_PER_SHIP = 0.05
FLEET_AURA_CAP = 1.15


def captain_on_ship(ship: Ship) -> CrewMember | None:
    return next((c for c in ship.crew if c.is_captain), None)


def acting_captain(ship: Ship) -> CrewMember | None:
    best: CrewMember | None = None
    for crew in ship.crew:
        if crew.is_captain:
            continue
        if best is None or crew.commerce_skill > best.commerce_skill:
            best = crew
    return best


def ship_commander(ship: Ship) -> CrewMember | None:
    return captain_on_ship(ship) or acting_captain(ship)


def command_mining_bonus(ship: Ship) -> float:
    """Captain aboard: mining / 100 (skill 50 → +50%). Otherwise 0."""
    captain = captain_on_ship(ship)
    if captain:
        return captain.mining_skill / 100
    return 0.0


def fleet_aura_income_multiplier(ship: Ship, fleet: list[Ship]) -> float:
    """Other fleet ships orbiting the same location lift income, up to the cap."""
    if ship.orbiting_location_id is None:
        return 1.0
    nearby = sum(
        1 for other in fleet
        if other is not ship and other.orbiting_location_id == ship.orbiting_location_id
    )
    return min(FLEET_AURA_CAP, 1.0 + FLEET_AURA_PER_SHIP * nearby)
