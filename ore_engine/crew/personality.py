"""
Personality traits.

Every crew member carries two distinct traits derived deterministically from
their id. Traits give light mechanical effects (±5-10%).
"""

from __future__ import annotations

from ore_engine.models.crew import CrewMember

ALL_TRAITS = (
    "stoic",
    "reckless",
    "cautious",
    "gregarious",
    "meticulous",
    "pragmatic",
    "idealistic",
    "sardonic",
    "loyal",
    "ambitious",
)

# trait → effect → additive modifier
TRAIT_EFFECTS: dict[str, dict[str, float]] = {
    "stoic": {"morale_recovery": 0.1, "training_speed": -0.05},
    "reckless": {"combat_attack": 0.1, "encounter_rate": 0.05},
    "cautious": {"evasion": 0.05, "mining_yield": -0.05},
    "gregarious": {"negotiation": 0.1},
    "meticulous": {"repair_speed": 0.1, "combat_attack": -0.05},
    "pragmatic": {"trade_income": 0.05},
    "idealistic": {"morale_recovery": 0.1, "departure_resistance": -0.1},
    "sardonic": {"morale_recovery": 0.05, "negotiation": -0.05},
    "loyal": {"departure_resistance": 0.25, "trade_income": -0.05},
    "ambitious": {"training_speed": 0.1, "salary_expectation": 0.1},
}


def _hash_string(value: str) -> int:
    # DJB2, wrapped to signed 32-bit like the save format expects
    h = 5381
    for ch in value:
        h = ((h << 5) + h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def generate_personality(seed: str) -> tuple[str, str]:
    """Same seed, same pair of traits. The two traits always differ."""
    idx1 = _hash_string(seed) % len(ALL_TRAITS)
    idx2 = _hash_string(seed + "_trait2") % len(ALL_TRAITS)
    if idx2 == idx1:
        idx2 = (idx2 + 1) % len(ALL_TRAITS)
    return ALL_TRAITS[idx1], ALL_TRAITS[idx2]


def trait_modifier(crew: CrewMember, effect: str) -> float:
    """Combined multiplier for one effect, e.g. 1.05 for +5%. Neutral is 1.0."""
    total = 0.0
    for trait in (crew.personality_trait1, crew.personality_trait2):
        if trait:
            total += TRAIT_EFFECTS.get(trait, {}).get(effect, 0.0)
    return 1.0 + total
