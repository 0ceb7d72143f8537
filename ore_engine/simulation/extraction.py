"""
Mining extraction: one tick for one ship orbiting a mine-enabled location.

Mining requires:
  1. a location with the 'mine' service and at least one ore offering
  2. powered, ship-mounted mining equipment
  3. free hold space for whole units

Crew assigned to mining_ops each claim one piece of gear per tick (best rate
they are qualified for), pick an ore, and add their yield to the ship's
fractional accumulator. Whole units move into ore cargo. With nobody assigned,
the best single piece of gear runs crew-less at a reduced rate on tier-0 ore.
"""

from __future__ import annotations

import copy
import logging
import math
import random
from dataclasses import dataclass, field

from ore_engine.catalog.equipment import get_mining_equipment_kind
from ore_engine.catalog.ores import ORE_CATALOG, OreKind, location_ore_yield_multiplier
from ore_engine.config import settings
from ore_engine.crew.mastery import empty_mastery_state
from ore_engine.models.crew import MINING, MINING_OPS, CrewMember
from ore_engine.models.equipment import EquipmentInstance
from ore_engine.models.location import Location
from ore_engine.models.ship import Ship
from ore_engine.simulation.collaborators import DEFAULT_COLLABORATORS, Collaborators
from ore_engine.simulation.selection import select_ore
from ore_engine.simulation.wear import apply_mining_wear
from ore_engine.simulation.yield_calc import (
    combine_factors,
    crewed_yield_factors,
    crewless_yield_factors,
    effective_equipment_rate,
    pick_equipment,
)

logger = logging.getLogger(__name__)

# Float sums such as 20 × 0.05 can land a hair under 1.0
_WHOLE_UNIT_EPSILON = 1e-9


@dataclass
class MasteryLevelUp:
    crew_name: str
    ore_name: str
    new_level: int


@dataclass
class MiningPass:
    """One miner (or the crew-less rig) working one piece of gear for a tick."""

    crew_id: int | None
    equipment_id: int | None
    ore_id: str
    ore_yield: float
    units: int


@dataclass
class MiningTickResult:
    ore_extracted: dict[str, int] = field(default_factory=dict)
    hold_full: bool = False
    mastery_level_ups: list[MasteryLevelUp] = field(default_factory=list)
    passes: list[MiningPass] = field(default_factory=list)

    @property
    def total_units(self) -> int:
        return sum(self.ore_extracted.values())


@dataclass
class _TickLedger:
    accumulator: dict[str, float]
    cargo: dict[str, int]
    capacity_kg: float
    added_kg: float = 0.0
    claimed: set[EquipmentInstance] = field(default_factory=set)


def has_powered_mining_equipment(ship: Ship) -> bool:
    return any(
        inst.powered and get_mining_equipment_kind(inst.kind_id) is not None
        for inst in ship.equipment
    )


def apply_mining_tick(
    ship: Ship,
    location: Location | None,
    collaborators: Collaborators = DEFAULT_COLLABORATORS,
) -> MiningTickResult | None:
    """
    Run one mining tick. Returns None when the ship cannot mine here at all,
    which is distinct from a result with zero yield.
    """
    if location is None or not location.can_be_mined:
        return None
    if not has_powered_mining_equipment(ship):
        return None

    ledger = _TickLedger(
        accumulator=dict(ship.mining_accumulator or {}),
        cargo=dict(ship.ore_cargo or {}),
        capacity_kg=collaborators.remaining_ore_capacity(ship, collaborators.non_ore_cargo_weight),
    )
    result = MiningTickResult()

    miners = collaborators.crew_assigned_to_role(ship, MINING_OPS)
    if miners:
        for miner in miners:
            _run_miner(miner, ship, location, ledger, result, collaborators)
        wear_reduction = _pool_wear_reduction(miners, collaborators)
    else:
        _run_crewless(ship, location, ledger, result, collaborators)
        wear_reduction = 0.0

    apply_mining_wear(ledger.claimed, wear_reduction)

    ship.mining_accumulator = ledger.accumulator
    ship.ore_cargo = ledger.cargo
    if result.hold_full:
        logger.debug("Ship %s: hold full at %s", ship.ship_name, location.name)
    return result


def _run_miner(
    miner: CrewMember,
    ship: Ship,
    location: Location,
    ledger: _TickLedger,
    result: MiningTickResult,
    collaborators: Collaborators,
) -> None:
    skill = miner.mining_skill or 0.0
    picked = pick_equipment(ship.equipment, ledger.claimed, skill)
    if picked is None:
        return
    instance, kind = picked
    ledger.claimed.add(instance)

    ore = select_ore(location.ore_offerings, skill, ship.selected_ore_id)
    if ore is None:
        return

    factors = crewed_yield_factors(
        miner,
        ship,
        ore,
        effective_equipment_rate(kind, instance.degradation),
        location_ore_yield_multiplier(location.ore_offerings, ore.id),
        collaborators,
    )
    ore_yield = combine_factors(factors)
    logger.debug(
        "%s on %s mining %s: %.4f/tick (%s)",
        miner.name, kind.id, ore.id, ore_yield,
        ", ".join(f"{f.name}={f.value:.3f}" for f in factors),
    )

    state = (miner.mastery or {}).get(MINING)
    double_chance = collaborators.pool_double_chance(state.get("pool") if state else None)
    units = _bank_yield(ledger, result, ore, ore_yield, double_chance, collaborators.rng)
    result.passes.append(MiningPass(miner.id, instance.id, ore.id, ore_yield, units))

    _train_miner(miner, ore, ore_yield, result, collaborators)


def _run_crewless(
    ship: Ship,
    location: Location,
    ledger: _TickLedger,
    result: MiningTickResult,
    collaborators: Collaborators,
) -> None:
    picked = pick_equipment(ship.equipment, ledger.claimed)
    if picked is None:
        return
    instance, kind = picked
    ledger.claimed.add(instance)

    # Skill 0 restricts the rig to tier-0 ore
    ore = select_ore(location.ore_offerings, 0, ship.selected_ore_id)
    if ore is None:
        return

    ore_yield = combine_factors(
        crewless_yield_factors(effective_equipment_rate(kind, instance.degradation))
    )
    units = _bank_yield(ledger, result, ore, ore_yield, 0.0, collaborators.rng)
    result.passes.append(MiningPass(None, instance.id, ore.id, ore_yield, units))


def _bank_yield(
    ledger: _TickLedger,
    result: MiningTickResult,
    ore: OreKind,
    ore_yield: float,
    double_chance: float,
    rng: random.Random,
) -> int:
    """Add fractional yield to the accumulator and move whole units into cargo."""
    previous = ledger.accumulator.get(ore.id, 0.0)
    progress = previous + ore_yield
    units = math.floor(progress + _WHOLE_UNIT_EPSILON)
    progress = max(0.0, progress - units)

    if units > 0 and double_chance > 0:
        rolls = units
        units += sum(1 for _ in range(rolls) if rng.random() < double_chance)

    free_kg = ledger.capacity_kg - ledger.added_kg
    affordable = math.floor(free_kg / ore.weight_per_unit) if free_kg > 0 else 0
    if affordable <= 0:
        # Nothing fits: accumulator keeps its previous value
        result.hold_full = True
        return 0
    if units > affordable:
        units = affordable
        progress = 0.0
        result.hold_full = True

    ledger.accumulator[ore.id] = progress
    if units > 0:
        ledger.cargo[ore.id] = ledger.cargo.get(ore.id, 0) + units
        ledger.added_kg += units * ore.weight_per_unit
        result.ore_extracted[ore.id] = result.ore_extracted.get(ore.id, 0) + units
    return units


def _train_miner(
    miner: CrewMember,
    ore: OreKind,
    ore_yield: float,
    result: MiningTickResult,
    collaborators: Collaborators,
) -> None:
    mastery = copy.deepcopy(miner.mastery or {})
    state = mastery.setdefault(MINING, empty_mastery_state())
    outcome = collaborators.award_xp(
        state,
        ore.id,
        settings.MASTERY_XP_PER_ORE * ore_yield,
        math.floor(miner.mining_skill or 0.0),
        len(ORE_CATALOG),
    )
    miner.mastery = mastery
    if outcome.leveled_up:
        result.mastery_level_ups.append(
            MasteryLevelUp(crew_name=miner.name, ore_name=ore.name, new_level=outcome.new_level)
        )


def _pool_wear_reduction(miners: list[CrewMember], collaborators: Collaborators) -> float:
    lead = max(miners, key=lambda c: c.mining_skill or 0.0)
    state = (lead.mastery or {}).get(MINING)
    return collaborators.pool_wear_reduction(state.get("pool") if state else None)
