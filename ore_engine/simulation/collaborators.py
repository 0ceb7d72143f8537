"""
Subsystems the mining engine consults but does not own.

Everything the engine reads from or writes to outside the ship being mined
goes through a Collaborators bundle, so a tick stays a plain function of its
inputs. The defaults are the game's own implementations; tests swap in stubs.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass, field

from ore_engine.crew import captain, health, jobs, mastery, personality
from ore_engine.logbook import append_log
from ore_engine.simulation import cargo


@dataclass
class Collaborators:
    # Cargo-weight accounting
    remaining_ore_capacity: Callable = cargo.remaining_ore_capacity
    non_ore_cargo_weight: Callable = cargo.non_ore_cargo_weight

    # Mastery
    award_xp: Callable = mastery.award_xp
    ore_mastery_yield_bonus: Callable = mastery.ore_mastery_yield_bonus
    pool_yield_bonus: Callable = mastery.pool_yield_bonus
    pool_double_chance: Callable = mastery.pool_double_chance
    pool_wear_reduction: Callable = mastery.pool_wear_reduction
    commerce_pool_sell_bonus: Callable = mastery.commerce_pool_sell_bonus

    # Captain bonuses
    command_mining_bonus: Callable = captain.command_mining_bonus
    fleet_aura_income_multiplier: Callable = captain.fleet_aura_income_multiplier
    ship_commander: Callable = captain.ship_commander

    # Crew state
    trait_modifier: Callable = personality.trait_modifier
    health_efficiency: Callable = health.health_efficiency
    crew_assigned_to_role: Callable = jobs.crew_assigned_to_role

    # Event log
    append_log: Callable = append_log

    rng: random.Random = field(default_factory=random.Random)


DEFAULT_COLLABORATORS = Collaborators()
