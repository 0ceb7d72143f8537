"""
Ore sales.

Ore is sold from a ship's hold at whatever location it is orbiting. Trade hubs
pay more than remote outposts, and the best trader aboard lifts the price.
"""

from __future__ import annotations

import copy
import logging
import math

from ore_engine.catalog.ores import ORE_CATALOG, OreKind, find_ore
from ore_engine.config import settings
from ore_engine.crew.mastery import empty_mastery_state
from ore_engine.models.crew import COMMERCE
from ore_engine.models.location import ASTEROID_BELT, MOON, ORBITAL, PLANET, SPACE_STATION, Location
from ore_engine.models.player import Player
from ore_engine.models.ship import Ship
from ore_engine.simulation.collaborators import DEFAULT_COLLABORATORS, Collaborators

logger = logging.getLogger(__name__)

LOCATION_PRICE_MULTIPLIERS: dict[str, float] = {
    PLANET: 1.1,
    SPACE_STATION: 1.0,
    ORBITAL: 0.85,
    MOON: 0.9,
    ASTEROID_BELT: 0.8,
}
DEFAULT_PRICE_MULTIPLIER = 0.8  # belts, planetoids, anything else

COMMERCE_BONUS_PER_SKILL = 0.005  # +0.5% per point, +50% at 100


def location_price_multiplier(location: Location) -> float:
    return LOCATION_PRICE_MULTIPLIERS.get(location.location_type, DEFAULT_PRICE_MULTIPLIER)


def best_commerce_skill(ship: Ship) -> float:
    return max((c.commerce_skill or 0.0 for c in ship.crew), default=0.0)


def ore_sell_price(
    ore: OreKind,
    location: Location,
    ship: Ship,
    collaborators: Collaborators = DEFAULT_COLLABORATORS,
) -> int:
    """Credits paid for one unit here, rounded to whole credits."""
    commander = collaborators.ship_commander(ship)
    state = (commander.mastery or {}).get(COMMERCE) if commander else None
    pool = state.get("pool") if state else None
    price = (
        ore.base_value
        * location_price_multiplier(location)
        * (1 + COMMERCE_BONUS_PER_SKILL * best_commerce_skill(ship))
        * (1 + collaborators.commerce_pool_sell_bonus(pool))
    )
    return math.floor(price + 0.5)


def sell_ore(
    ship: Ship,
    ore_id: str,
    quantity: int,
    location: Location,
    player: Player,
    collaborators: Collaborators = DEFAULT_COLLABORATORS,
) -> int:
    """
    Sell ore from a ship's hold. Returns credits earned.

    Asking for nothing, for an unknown ore, or for more than the hold carries
    is a no-op that earns 0.
    """
    ore = find_ore(ore_id)
    held = ship.cargo_quantity(ore_id)
    if ore is None or quantity <= 0 or held < quantity:
        logger.debug(
            "Rejected sale of %s x%s from %s (held %d)", ore_id, quantity, ship.ship_name, held
        )
        return 0

    unit_price = ore_sell_price(ore, location, ship, collaborators)
    aura = collaborators.fleet_aura_income_multiplier(ship, list(player.ships))
    total_credits = math.floor(unit_price * quantity * aura + 0.5)

    cargo = dict(ship.ore_cargo or {})
    remaining = held - quantity
    if remaining > 0:
        cargo[ore_id] = remaining
    else:
        cargo.pop(ore_id, None)
    ship.ore_cargo = cargo
    assert ship.cargo_quantity(ore_id) == held - quantity

    player.credits = (player.credits or 0) + total_credits
    player.lifetime_credits_earned = (player.lifetime_credits_earned or 0) + total_credits
    ship.credits_earned = (ship.credits_earned or 0) + total_credits

    _train_commander(ship, location, quantity, collaborators)

    collaborators.append_log(
        player.log_entries,
        player.game_time or 0.0,
        "ore_sold",
        f"{ship.ship_name} sold {quantity} {ore.icon} {ore.name} for "
        f"{total_credits:,} cr at {location.name}",
        ship.ship_name,
        {"ore_id": ore_id, "quantity": quantity, "credits": total_credits, "location": location.key},
    )
    return total_credits


def sell_all_ore(
    ship: Ship,
    location: Location,
    player: Player,
    collaborators: Collaborators = DEFAULT_COLLABORATORS,
) -> int:
    total = 0
    # Snapshot: each sale replaces ship.ore_cargo
    for ore_id, quantity in list((ship.ore_cargo or {}).items()):
        total += sell_ore(ship, ore_id, quantity, location, player, collaborators)
    return total


def _train_commander(
    ship: Ship,
    location: Location,
    quantity: int,
    collaborators: Collaborators,
) -> None:
    commander = collaborators.ship_commander(ship)
    if commander is None:
        return
    mastery = copy.deepcopy(commander.mastery or {})
    state = mastery.setdefault(COMMERCE, empty_mastery_state())
    collaborators.award_xp(
        state,
        f"ore_sale_{location.key}",
        settings.COMMERCE_XP_PER_ORE_SOLD * quantity,
        math.floor(commander.commerce_skill or 0.0),
        len(ORE_CATALOG),
    )
    commander.mastery = mastery
