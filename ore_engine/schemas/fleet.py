from datetime import datetime

from pydantic import BaseModel, Field


# ── Location ──────────────────────────────────────────────────────────────────

class LocationOut(BaseModel):
    id: int
    key: str
    name: str
    location_type: str
    services: list[str]
    ore_offerings: dict[str, float]

    model_config = {"from_attributes": True}


# ── Crew ──────────────────────────────────────────────────────────────────────

class CrewOut(BaseModel):
    id: int
    name: str
    is_captain: bool
    job_role: str | None
    job_slot: int
    mining_skill: float
    commerce_skill: float
    piloting_skill: float
    health: float
    personality_trait1: str | None
    personality_trait2: str | None
    mastery: dict

    model_config = {"from_attributes": True}


# ── Equipment ─────────────────────────────────────────────────────────────────

class EquipmentOut(BaseModel):
    id: int
    kind_id: str
    degradation: float
    powered: bool

    model_config = {"from_attributes": True}


# ── Ship ──────────────────────────────────────────────────────────────────────

class ShipOut(BaseModel):
    id: int
    ship_name: str
    cargo_capacity_kg: float
    non_ore_cargo_kg: float
    orbiting_location_id: int | None
    ore_cargo: dict[str, int]
    mining_accumulator: dict[str, float]
    selected_ore_id: str | None
    credits_earned: int
    crew: list[CrewOut]
    equipment: list[EquipmentOut]

    model_config = {"from_attributes": True}


# ── Player ────────────────────────────────────────────────────────────────────

class PlayerCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)


class PlayerOut(BaseModel):
    id: int
    username: str
    credits: int
    lifetime_credits_earned: int
    game_time: float
    created_at: datetime | None = None
    ships: list[ShipOut]

    model_config = {"from_attributes": True}


class LogEntryOut(BaseModel):
    id: int
    game_time: float
    kind: str
    message: str
    ship_name: str | None
    extra: dict

    model_config = {"from_attributes": True}


class RelocateRequest(BaseModel):
    location_key: str = Field(..., min_length=1, max_length=64)
