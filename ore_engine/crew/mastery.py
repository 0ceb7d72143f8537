"""
Three-layer crew progression.

Layer 1: skill level (0-99), owned by the crew leveling subsystem
Layer 2: item mastery (0-99 per item): per-ore / per-trade efficiency bonuses
Layer 3: mastery pool: skill-wide bonuses unlocked at fill checkpoints

States are plain JSON-friendly dicts so they can live in CrewMember.mastery:
    {"items": {key: {"xp": float, "level": int}}, "pool": {"xp": float, "max_xp": float}}
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _build_xp_table() -> list[int]:
    table: list[int] = []
    acc = 0.0
    for lvl in range(100):
        table.append(math.floor(acc))
        acc += math.floor(lvl + 300 * 2 ** (lvl / 7)) / 4
    return table


XP_TABLE = _build_xp_table()

MAX_MASTERY_LEVEL = 99

POOL_CAP_PER_ITEM = 1_000
POOL_FLOW_RATE = 0.25
POOL_FLOW_RATE_POST_99 = 0.5
POOL_CHECKPOINTS = (0.1, 0.25, 0.5, 0.95)

MINING_CHECKPOINT_LABELS = {
    0.1: "+5% Mining mastery XP",
    0.25: "+5% yield on all ores",
    0.5: "-10% equipment degradation while mining",
    0.95: "+10% chance to double any ore drop",
}

COMMERCE_CHECKPOINT_LABELS = {
    0.1: "+5% Commerce mastery XP",
    0.25: "-5% crew salary costs",
    0.5: "+5% sell price for all ore and goods",
    0.95: "+10% payment on all contracts",
}

CHECKPOINT_LABELS = {
    "mining": MINING_CHECKPOINT_LABELS,
    "commerce": COMMERCE_CHECKPOINT_LABELS,
}

# (min level, yield bonus), highest first
_ORE_YIELD_BONUSES = ((99, 0.4), (80, 0.3), (65, 0.25), (40, 0.15), (25, 0.1), (10, 0.05))


@dataclass
class MasteryXpResult:
    item_key: str
    mastery_xp_gained: float
    pool_xp_gained: float
    old_level: int
    new_level: int

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


@dataclass
class CheckpointBonus:
    threshold: float
    label: str
    active: bool


def empty_mastery_state() -> dict:
    return {"items": {}, "pool": {"xp": 0.0, "max_xp": 0.0}}


def xp_for_mastery_level(level: int) -> int:
    if level <= 0:
        return 0
    return XP_TABLE[min(level, MAX_MASTERY_LEVEL)]


def mastery_level_from_xp(xp: float) -> int:
    for lvl in range(MAX_MASTERY_LEVEL, -1, -1):
        if xp >= XP_TABLE[lvl]:
            return lvl
    return 0


def item_mastery_level(state: dict | None, item_key: str) -> int:
    if not state:
        return 0
    item = state.get("items", {}).get(item_key)
    return int(item["level"]) if item else 0


# ── Pool checkpoints ──────────────────────────────────────────────────────────

def is_checkpoint_active(pool: dict | None, threshold: float) -> bool:
    if not pool:
        return False
    max_xp = pool.get("max_xp", 0.0)
    if max_xp <= 0:
        return False
    return pool.get("xp", 0.0) >= max_xp * threshold


def pool_fill_percent(pool: dict | None) -> float:
    if not pool or pool.get("max_xp", 0.0) <= 0:
        return 0.0
    return min(100.0, pool["xp"] / pool["max_xp"] * 100.0)


def checkpoint_bonuses(skill: str, pool: dict | None) -> list[CheckpointBonus]:
    labels = CHECKPOINT_LABELS.get(skill, {})
    return [
        CheckpointBonus(threshold=t, label=labels.get(t, ""), active=is_checkpoint_active(pool, t))
        for t in POOL_CHECKPOINTS
    ]


def ore_mastery_yield_bonus(level: int) -> float:
    for min_level, bonus in _ORE_YIELD_BONUSES:
        if level >= min_level:
            return bonus
    return 0.0


def pool_mastery_xp_bonus(pool: dict | None) -> float:
    return 0.05 if is_checkpoint_active(pool, 0.1) else 0.0


def pool_yield_bonus(pool: dict | None) -> float:
    return 0.05 if is_checkpoint_active(pool, 0.25) else 0.0


def pool_wear_reduction(pool: dict | None) -> float:
    return 0.1 if is_checkpoint_active(pool, 0.5) else 0.0


def pool_double_chance(pool: dict | None) -> float:
    return 0.1 if is_checkpoint_active(pool, 0.95) else 0.0


def commerce_pool_sell_bonus(pool: dict | None) -> float:
    return 0.05 if is_checkpoint_active(pool, 0.5) else 0.0


# ── XP awards ─────────────────────────────────────────────────────────────────

def award_xp(
    state: dict,
    item_key: str,
    base_xp: float,
    skill_level: int,
    total_item_count: int,
) -> MasteryXpResult:
    """
    Award mastery XP to one item and flow a share of it into the skill pool.

    Mutates `state` in place. Callers holding the state in a JSON column must
    reassign a copy afterwards so the ORM notices the change.
    """
    items = state.setdefault("items", {})
    pool = state.setdefault("pool", {"xp": 0.0, "max_xp": 0.0})
    item = items.setdefault(item_key, {"xp": 0.0, "level": 0})
    old_level = int(item["level"])

    effective_xp = base_xp * (1 + pool_mastery_xp_bonus(pool))
    item["xp"] = item["xp"] + effective_xp
    item["level"] = mastery_level_from_xp(item["xp"])

    flow_rate = POOL_FLOW_RATE_POST_99 if skill_level >= MAX_MASTERY_LEVEL else POOL_FLOW_RATE
    pool_xp = effective_xp * flow_rate
    pool["max_xp"] = float(POOL_CAP_PER_ITEM * total_item_count)
    pool_gained = max(0.0, min(pool_xp, pool["max_xp"] - pool["xp"]))
    pool["xp"] = min(pool["max_xp"], pool["xp"] + pool_xp)

    return MasteryXpResult(
        item_key=item_key,
        mastery_xp_gained=effective_xp,
        pool_xp_gained=pool_gained,
        old_level=old_level,
        new_level=int(item["level"]),
    )


def spend_pool_xp_on_item(state: dict, item_key: str, levels_to_gain: int) -> int:
    """Spend pool XP to raise an item's mastery. Returns levels gained."""
    items = state.setdefault("items", {})
    pool = state.setdefault("pool", {"xp": 0.0, "max_xp": 0.0})
    item = items.setdefault(item_key, {"xp": 0.0, "level": 0})
    gained = 0
    for _ in range(levels_to_gain):
        next_level = item["level"] + 1
        if next_level > MAX_MASTERY_LEVEL:
            break
        needed = xp_for_mastery_level(next_level) - item["xp"]
        if needed > 0:
            if pool["xp"] < needed:
                break
            pool["xp"] -= needed
            item["xp"] += needed
        item["level"] = mastery_level_from_xp(item["xp"])
        gained += 1
    return gained
