"""
Static ore table.

Ores are defined once at import time and never mutated. Catalog order matters:
auto-selection breaks value ties in favour of the ore listed first.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class OreKind:
    id: str
    name: str
    icon: str
    base_value: int            # credits per unit
    mining_level_required: int  # minimum mining skill
    weight_per_unit: float     # kg per unit
    description: str = ""


ORE_CATALOG: tuple[OreKind, ...] = (
    OreKind("iron_ore", "Iron Ore", "⛏️", 8, 0, 10.0,
            "Common ferrous mineral. Primary structural material for station construction."),
    OreKind("silicate", "Silicate", "💎", 5, 0, 8.0,
            "Silicon-rich mineral used in electronics and solar panel manufacturing."),
    OreKind("copper_ore", "Copper Ore", "🟤", 15, 10, 12.0,
            "Essential conductive material for wiring and electronics systems."),
    OreKind("water_ice", "Water Ice", "🧊", 12, 5, 15.0,
            "Frozen water from regolith and subsurface deposits."),
    OreKind("rare_earth", "Rare Earth Elements", "✨", 35, 10, 5.0,
            "Critical minerals for advanced magnets, sensors, and fusion components."),
    OreKind("titanium_ore", "Titanium Ore", "🔩", 60, 25, 15.0,
            "High-strength, low-mass alloy precursor. Premium shipbuilding material."),
    OreKind("platinum_ore", "Platinum Ore", "🪙", 120, 40, 8.0,
            "Precious metal used in catalytic systems and high-end electronics."),
    OreKind("helium3", "Helium-3", "⚛️", 250, 60, 2.0,
            "Fusion fuel isotope extracted from regolith and gas giant atmospheres."),
    OreKind("exotic_matter", "Exotic Matter", "🌀", 500, 90, 1.0,
            "Anomalous material with negative energy density."),
)

_ORES_BY_ID: dict[str, OreKind] = {ore.id: ore for ore in ORE_CATALOG}


def get_ore(ore_id: str) -> OreKind:
    """Look up an ore; unknown ids are a programming error."""
    try:
        return _ORES_BY_ID[ore_id]
    except KeyError:
        raise KeyError(f"Ore definition not found: {ore_id}") from None


def find_ore(ore_id: str | None) -> OreKind | None:
    if ore_id is None:
        return None
    return _ORES_BY_ID.get(ore_id)


def all_ores() -> tuple[OreKind, ...]:
    return ORE_CATALOG


def skill_meets(skill: float, required: int) -> bool:
    return math.floor(skill) >= required


def can_mine_ore(mining_skill: float, ore_id: str) -> bool:
    return skill_meets(mining_skill, get_ore(ore_id).mining_level_required)


def minable_ores(mining_skill: float) -> list[OreKind]:
    return [ore for ore in ORE_CATALOG if skill_meets(mining_skill, ore.mining_level_required)]


# ── Location offering helpers ─────────────────────────────────────────────────

def location_ore_yield_multiplier(offerings: Mapping[str, float] | None, ore_id: str) -> float:
    """Yield multiplier for an ore at a location (1.0 when not listed)."""
    if not offerings:
        return 1.0
    return float(offerings.get(ore_id, 1.0))


def is_ore_available_at(offerings: Mapping[str, float] | None, ore_id: str) -> bool:
    return bool(offerings) and ore_id in offerings
