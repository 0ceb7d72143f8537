from __future__ import annotations

from collections.abc import Iterable

from ore_engine.config import settings
from ore_engine.models.equipment import EquipmentInstance

MAX_DEGRADATION = 100.0


def wear_amount(wear_reduction: float = 0.0) -> float:
    return settings.MINING_WEAR_PER_TICK * (1 - wear_reduction)


def apply_mining_wear(equipment: Iterable[EquipmentInstance], wear_reduction: float = 0.0) -> None:
    """Degrade gear that was worked this tick. Fully worn gear is never disabled."""
    amount = max(0.0, wear_amount(wear_reduction))
    for instance in equipment:
        current = instance.degradation or 0.0
        instance.degradation = max(0.0, min(MAX_DEGRADATION, current + amount))
