"""Which ore a miner works this tick."""

from __future__ import annotations

from collections.abc import Mapping

from ore_engine.catalog.ores import OreKind, can_mine_ore, find_ore, is_ore_available_at, minable_ores


def select_ore(
    offerings: Mapping[str, float] | None,
    mining_skill: float,
    preferred_ore_id: str | None = None,
) -> OreKind | None:
    """
    Resolve the ore to extract at a location.

    An explicit preference that the location offers is honoured or not at all:
    when the miner lacks the skill for it, the result is None rather than a
    substitute. Without a usable preference, the ore with the best
    base_value × location multiplier among those the skill permits wins, ties
    going to the earlier catalog entry.
    """
    if not offerings:
        return None

    preferred = find_ore(preferred_ore_id)
    if preferred is not None and is_ore_available_at(offerings, preferred.id):
        if can_mine_ore(mining_skill, preferred.id):
            return preferred
        return None

    best: OreKind | None = None
    best_score = 0.0
    for ore in minable_ores(mining_skill):
        if not is_ore_available_at(offerings, ore.id):
            continue
        score = ore.base_value * float(offerings[ore.id])
        if best is None or score > best_score:
            best, best_score = ore, score
    return best
