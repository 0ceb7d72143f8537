from __future__ import annotations
import copy
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from ore_engine.catalog.equipment import mining_equipment_kinds
from ore_engine.catalog.ores import all_ores, find_ore, is_ore_available_at, minable_ores
from ore_engine.crew.jobs import crew_assigned_to_role
from ore_engine.crew.mastery import (
    CHECKPOINT_LABELS, checkpoint_bonuses, empty_mastery_state, pool_fill_percent, spend_pool_xp_on_item,
)
from ore_engine.database import get_db
from ore_engine.deps import fleet_ship, get_player
from ore_engine.models.crew import MINING, MINING_OPS, CrewMember
from ore_engine.models.player import Player
from ore_engine.models.ship import Ship
from ore_engine.schemas.fleet import ShipOut
from ore_engine.schemas.mining import (
    CheckpointOut, CrewMasteryOut, EquipmentKindOut, ItemMasteryOut, MiningStatus, OreOut,
    SelectOreRequest, SkillMasteryOut, SpendPoolOut, SpendPoolRequest,
)
from ore_engine.simulation.cargo import ore_cargo_weight, remaining_ore_capacity
from ore_engine.simulation.extraction import has_powered_mining_equipment

router = APIRouter(prefix="/mining", tags=["mining"])


def _minable_here(ship: Ship) -> list[str]:
    location = ship.location
    if location is None or not location.can_be_mined:
        return []
    miners = crew_assigned_to_role(ship, MINING_OPS)
    skill = max((c.mining_skill or 0.0 for c in miners), default=0.0)
    return [ore.id for ore in minable_ores(skill) if is_ore_available_at(location.ore_offerings, ore.id)]


def _status(ship: Ship) -> MiningStatus:
    location = ship.location
    return MiningStatus(
        ship_id=ship.id,
        location_key=location.key if location else None,
        can_mine=bool(location and location.can_be_mined and has_powered_mining_equipment(ship)),
        selected_ore_id=ship.selected_ore_id,
        ore_cargo=dict(ship.ore_cargo or {}),
        mining_accumulator=dict(ship.mining_accumulator or {}),
        ore_cargo_kg=ore_cargo_weight(ship),
        remaining_capacity_kg=remaining_ore_capacity(ship),
        minable_ore_ids=_minable_here(ship),
    )


def _skill_mastery(skill: str, state: dict | None) -> SkillMasteryOut:
    state = state or empty_mastery_state()
    pool = state.get("pool")
    return SkillMasteryOut(
        skill=skill,
        pool_xp=(pool or {}).get("xp", 0.0),
        pool_max_xp=(pool or {}).get("max_xp", 0.0),
        pool_fill_percent=pool_fill_percent(pool),
        checkpoints=[CheckpointOut.model_validate(c) for c in checkpoint_bonuses(skill, pool)],
        items=[
            ItemMasteryOut(item_key=key, xp=item["xp"], level=item["level"])
            for key, item in state.get("items", {}).items()
        ],
    )


def _crew_member(ship: Ship, crew_id: int) -> CrewMember:
    member = next((c for c in ship.crew if c.id == crew_id), None)
    if not member:
        raise HTTPException(status_code=404, detail="Crew member not found")
    return member


@router.get("/ores", response_model=list[OreOut])
async def list_ores(mining_skill: float | None = None):
    """The ore catalog, optionally narrowed to what a miner of the given skill can work."""
    ores = all_ores() if mining_skill is None else minable_ores(mining_skill)
    return [OreOut.model_validate(ore) for ore in ores]


@router.get("/equipment", response_model=list[EquipmentKindOut])
async def list_mining_equipment():
    return [EquipmentKindOut.model_validate(kind) for kind in mining_equipment_kinds()]


@router.get("/{player_id}/ships/{ship_id}", response_model=ShipOut)
async def get_ship(ship_id: int, player: Player = Depends(get_player)):
    return ShipOut.model_validate(fleet_ship(player, ship_id))


@router.get("/{player_id}/ships/{ship_id}/status", response_model=MiningStatus)
async def mining_status(ship_id: int, player: Player = Depends(get_player)):
    return _status(fleet_ship(player, ship_id))


@router.put("/{player_id}/ships/{ship_id}/selected-ore", response_model=MiningStatus)
async def select_ore(
    ship_id: int,
    req: SelectOreRequest,
    player: Player = Depends(get_player),
    db: AsyncSession = Depends(get_db),
):
    ship = fleet_ship(player, ship_id)
    if req.ore_id is not None and find_ore(req.ore_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown ore: {req.ore_id}")
    ship.selected_ore_id = req.ore_id
    db.add(ship)
    await db.commit()
    return _status(ship)


@router.get("/{player_id}/ships/{ship_id}/crew/{crew_id}/mastery", response_model=CrewMasteryOut)
async def crew_mastery(ship_id: int, crew_id: int, player: Player = Depends(get_player)):
    member = _crew_member(fleet_ship(player, ship_id), crew_id)
    mastery = member.mastery or {}
    return CrewMasteryOut(
        crew_id=member.id,
        name=member.name,
        skills=[_skill_mastery(skill, mastery.get(skill)) for skill in CHECKPOINT_LABELS],
    )


@router.post("/{player_id}/ships/{ship_id}/crew/{crew_id}/mastery/spend", response_model=SpendPoolOut)
async def spend_mastery_pool(
    ship_id: int,
    crew_id: int,
    req: SpendPoolRequest,
    player: Player = Depends(get_player),
    db: AsyncSession = Depends(get_db),
):
    """Buy item mastery levels with the skill's pool XP."""
    member = _crew_member(fleet_ship(player, ship_id), crew_id)
    if req.skill not in CHECKPOINT_LABELS:
        raise HTTPException(status_code=404, detail=f"Unknown mastery skill: {req.skill}")
    if req.skill == MINING and find_ore(req.item_key) is None:
        raise HTTPException(status_code=404, detail=f"Unknown ore: {req.item_key}")

    mastery = copy.deepcopy(member.mastery or {})
    state = mastery.setdefault(req.skill, empty_mastery_state())
    gained = spend_pool_xp_on_item(state, req.item_key, req.levels)
    member.mastery = mastery
    db.add(member)
    await db.commit()
    return SpendPoolOut(levels_gained=gained, mastery=_skill_mastery(req.skill, state))
