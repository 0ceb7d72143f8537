from __future__ import annotations

from dataclasses import dataclass

MINING_CATEGORY = "mining"


@dataclass(frozen=True)
class EquipmentKind:
    id: str
    name: str
    category: str
    power_draw: float                 # kW
    mining_rate: float = 0.0          # extraction rate multiplier (mining only)
    mining_level_required: int = 0    # min operator mining skill (mining only)
    value: int = 0

    @property
    def is_mining(self) -> bool:
        return self.category == MINING_CATEGORY


# Mining equipment is ship-mounted and operated from the mining bay.
EQUIPMENT_CATALOG: tuple[EquipmentKind, ...] = (
    EquipmentKind("life_support", "Life Support System", "life_support", 12.0, value=3000),
    EquipmentKind("nav_scanner", "Navigation Scanner", "navigation", 4.0, value=1500),
    EquipmentKind("cargo_stabilizer", "Cargo Stabilizer", "utility", 3.0, value=900),
    EquipmentKind("mining_laser", "Mining Laser Array", MINING_CATEGORY, 8.0,
                  mining_rate=1.0, mining_level_required=0, value=2000),
    EquipmentKind("mining_rig", "Industrial Mining Rig", MINING_CATEGORY, 15.0,
                  mining_rate=2.0, mining_level_required=20, value=8000),
    EquipmentKind("deep_core_mining", "Deep Core Extraction System", MINING_CATEGORY, 25.0,
                  mining_rate=3.5, mining_level_required=50, value=30000),
    EquipmentKind("quantum_mining", "Quantum Resonance Array", MINING_CATEGORY, 40.0,
                  mining_rate=5.0, mining_level_required=80, value=80000),
)

_EQUIPMENT_BY_ID: dict[str, EquipmentKind] = {kind.id: kind for kind in EQUIPMENT_CATALOG}


def get_equipment_kind(kind_id: str) -> EquipmentKind | None:
    return _EQUIPMENT_BY_ID.get(kind_id)


def get_mining_equipment_kind(kind_id: str) -> EquipmentKind | None:
    """Mining kind for an id; None for unknown or non-mining equipment."""
    kind = _EQUIPMENT_BY_ID.get(kind_id)
    if kind is None or not kind.is_mining:
        return None
    return kind


def mining_equipment_kinds() -> list[EquipmentKind]:
    """All mining kinds, cheapest tier first."""
    return sorted(
        (kind for kind in EQUIPMENT_CATALOG if kind.is_mining),
        key=lambda kind: kind.mining_level_required,
    )
