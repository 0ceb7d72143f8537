"""
Per-miner extraction rate.

Each contribution to the yield is a named multiplier; the final rate is their
product. Keeping them separate lets the UI and tests inspect every factor.

    yield = base × equipment × skill × (1 + ore mastery) × (1 + pool)
            × captain × location × trait × health

Crew-less operation uses base × equipment × crew-less penalty only.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from ore_engine.catalog.equipment import EquipmentKind, get_mining_equipment_kind
from ore_engine.catalog.ores import OreKind, skill_meets
from ore_engine.config import settings
from ore_engine.crew.mastery import item_mastery_level
from ore_engine.models.crew import MINING, CrewMember
from ore_engine.models.equipment import EquipmentInstance
from ore_engine.models.ship import Ship


@dataclass(frozen=True)
class YieldFactor:
    name: str
    value: float


def combine_factors(factors: Iterable[YieldFactor]) -> float:
    return math.prod(f.value for f in factors)


def skill_factor(mining_skill: float) -> float:
    """Linear: 1.0 at skill 0, 2.0 at skill 100."""
    return 1 + mining_skill / 100


def effective_equipment_rate(kind: EquipmentKind, degradation: float) -> float:
    """Worn gear keeps working; at 100% degradation it runs at half rate."""
    wear = max(0.0, min(100.0, degradation or 0.0))
    return kind.mining_rate * (1 - wear / settings.EQUIPMENT_EFFECTIVENESS_DIVISOR)


def pick_equipment(
    equipment: Iterable[EquipmentInstance],
    claimed: set[EquipmentInstance],
    mining_skill: float | None = None,
) -> tuple[EquipmentInstance, EquipmentKind] | None:
    """
    Highest-rate powered mining gear not yet claimed this tick.

    With a skill, gear the operator is not qualified for is skipped; crew-less
    operation passes None and takes whatever is fitted. Equal rates go to the
    earlier instance.
    """
    best: tuple[EquipmentInstance, EquipmentKind] | None = None
    for instance in equipment:
        if not instance.powered or instance in claimed:
            continue
        kind = get_mining_equipment_kind(instance.kind_id)
        if kind is None:
            continue
        if mining_skill is not None and not skill_meets(mining_skill, kind.mining_level_required):
            continue
        if best is None or kind.mining_rate > best[1].mining_rate:
            best = (instance, kind)
    return best


def crewed_yield_factors(
    miner: CrewMember,
    ship: Ship,
    ore: OreKind,
    equipment_rate: float,
    location_multiplier: float,
    collaborators,
) -> list[YieldFactor]:
    state = (miner.mastery or {}).get(MINING)
    pool = state.get("pool") if state else None
    mastery_level = item_mastery_level(state, ore.id)
    return [
        YieldFactor("base_rate", settings.MINING_BASE_RATE),
        YieldFactor("equipment", equipment_rate),
        YieldFactor("skill", skill_factor(miner.mining_skill or 0.0)),
        YieldFactor("ore_mastery", 1 + collaborators.ore_mastery_yield_bonus(mastery_level)),
        YieldFactor("mastery_pool", 1 + collaborators.pool_yield_bonus(pool)),
        YieldFactor("captain", 1 + collaborators.command_mining_bonus(ship)),
        YieldFactor("location", location_multiplier),
        YieldFactor("trait", collaborators.trait_modifier(miner, "mining_yield")),
        YieldFactor("health", collaborators.health_efficiency(miner.health)),
    ]


def crewless_yield_factors(equipment_rate: float) -> list[YieldFactor]:
    return [
        YieldFactor("base_rate", settings.MINING_BASE_RATE),
        YieldFactor("equipment", equipment_rate),
        YieldFactor("crewless", settings.CREWLESS_MINING_MULTIPLIER),
    ]
