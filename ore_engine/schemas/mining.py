from pydantic import BaseModel, Field


class OreOut(BaseModel):
    id: str
    name: str
    icon: str
    base_value: int
    mining_level_required: int
    weight_per_unit: float
    description: str

    model_config = {"from_attributes": True}


class EquipmentKindOut(BaseModel):
    id: str
    name: str
    category: str
    power_draw: float
    mining_rate: float
    mining_level_required: int
    value: int

    model_config = {"from_attributes": True}


class SelectOreRequest(BaseModel):
    # None clears the preference and returns the crew to auto-selection
    ore_id: str | None = Field(None, max_length=32)


class MiningStatus(BaseModel):
    ship_id: int
    location_key: str | None
    can_mine: bool
    selected_ore_id: str | None
    ore_cargo: dict[str, int]
    mining_accumulator: dict[str, float]
    ore_cargo_kg: float
    remaining_capacity_kg: float
    # Offered here and within reach of the best assigned miner (skill 0 crew-less)
    minable_ore_ids: list[str] = []


# ── Crew mastery ──────────────────────────────────────────────────────────────

class CheckpointOut(BaseModel):
    threshold: float
    label: str
    active: bool

    model_config = {"from_attributes": True}


class ItemMasteryOut(BaseModel):
    item_key: str
    xp: float
    level: int


class SkillMasteryOut(BaseModel):
    skill: str
    pool_xp: float
    pool_max_xp: float
    pool_fill_percent: float
    checkpoints: list[CheckpointOut]
    items: list[ItemMasteryOut]


class CrewMasteryOut(BaseModel):
    crew_id: int
    name: str
    skills: list[SkillMasteryOut]


class SpendPoolRequest(BaseModel):
    skill: str = Field(..., min_length=1, max_length=32)
    item_key: str = Field(..., min_length=1, max_length=32)
    levels: int = Field(1, gt=0, le=99)


class SpendPoolOut(BaseModel):
    levels_gained: int
    mastery: SkillMasteryOut
