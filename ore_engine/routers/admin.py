from __future__ import annotations
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from ore_engine.config import settings
from ore_engine.crew.personality import generate_personality
from ore_engine.database import get_db, init_db
from ore_engine.models.crew import CrewMember, MINING_OPS, HELM
from ore_engine.models.equipment import EquipmentInstance
from ore_engine.models.location import (
    ASTEROID_BELT, MOON, ORBITAL, PLANET, SPACE_STATION,
    SERVICE_HIRE, SERVICE_MINE, SERVICE_REFUEL, SERVICE_REPAIR, SERVICE_TRADE, Location,
)
from ore_engine.models.player import Player
from ore_engine.models.ship import Ship
from ore_engine.schemas.fleet import LogEntryOut, PlayerCreate, PlayerOut, RelocateRequest, ShipOut
from ore_engine.simulation.event_bus import event_bus
from ore_engine.simulation.tick import get_total_ticks, process_mining_tick

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)

STARTER_LOCATION_KEY = "debris_field_alpha"


@router.get("/status")
async def server_status(db: AsyncSession = Depends(get_db)):
    player_count = (await db.execute(select(func.count(Player.id)))).scalar_one()
    ship_count = (await db.execute(select(func.count(Ship.id)))).scalar_one()
    location_count = (await db.execute(select(func.count(Location.id)))).scalar_one()
    return {
        "status": "running",
        "total_ticks": get_total_ticks(),
        "player_count": player_count,
        "ship_count": ship_count,
        "location_count": location_count,
        "subscribers": event_bus.subscriber_count,
    }


def _location_seed_data() -> list[dict]:
    return [
        {"key": "earth", "name": "Earth", "location_type": PLANET,
         "services": [SERVICE_REFUEL, SERVICE_TRADE, SERVICE_REPAIR, SERVICE_HIRE],
         "ore_offerings": {}},
        {"key": "leo_station", "name": "Gateway Station", "location_type": SPACE_STATION,
         "services": [SERVICE_REFUEL, SERVICE_TRADE], "ore_offerings": {}},
        {"key": "meo_depot", "name": "Meridian Depot", "location_type": ORBITAL,
         "services": [SERVICE_REFUEL, SERVICE_REPAIR], "ore_offerings": {}},
        {"key": "forge_station", "name": "Forge Station", "location_type": SPACE_STATION,
         "services": [SERVICE_REFUEL, SERVICE_TRADE, SERVICE_REPAIR, SERVICE_HIRE],
         "ore_offerings": {}},
        {"key": "debris_field_alpha", "name": "Debris Field Alpha", "location_type": ASTEROID_BELT,
         "services": [SERVICE_MINE],
         "ore_offerings": {"iron_ore": 1.0, "silicate": 1.0}},
        {"key": "the_scatter", "name": "The Scatter", "location_type": ASTEROID_BELT,
         "services": [SERVICE_MINE, SERVICE_TRADE],
         "ore_offerings": {"iron_ore": 1.2, "silicate": 1.0, "copper_ore": 0.8, "rare_earth": 0.5}},
        {"key": "luna", "name": "Luna", "location_type": MOON,
         "services": [SERVICE_REFUEL, SERVICE_MINE, SERVICE_TRADE],
         "ore_offerings": {"water_ice": 1.5, "titanium_ore": 0.6, "helium3": 0.3}},
        {"key": "mars", "name": "Mars", "location_type": PLANET,
         "services": [SERVICE_REFUEL, SERVICE_TRADE, SERVICE_REPAIR, SERVICE_HIRE],
         "ore_offerings": {}},
    ]


async def seed_locations(db: AsyncSession) -> int:
    added = 0
    for ld in _location_seed_data():
        exists = (await db.execute(
            select(Location).where(Location.key == ld["key"])
        )).scalar_one_or_none()
        if not exists:
            db.add(Location(**ld))
            added += 1
    await db.commit()
    return added


async def _load_player(db: AsyncSession, player_id: int) -> Player:
    player = (await db.execute(
        select(Player).where(Player.id == player_id).execution_options(populate_existing=True)
    )).scalar_one_or_none()
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")
    return player


def build_starter_ship(player_id: int, location: Location) -> Ship:
    """The Perseverance: laser-equipped hauler with a captain and one miner."""
    ship = Ship(
        player_id=player_id,
        ship_name="Perseverance",
        cargo_capacity_kg=2000.0,
        non_ore_cargo_kg=0.0,
        orbiting_location_id=location.id,
        location=location,
        ore_cargo={},
        mining_accumulator={},
        credits_earned=0,
    )
    ship.equipment = [
        EquipmentInstance(kind_id="mining_laser", degradation=0.0, powered=True),
        EquipmentInstance(kind_id="life_support", degradation=0.0, powered=True),
    ]
    crew = [
        ("Mara Voss", True, HELM, 30.0, 25.0, 40.0),
        ("Teo Ashby", False, MINING_OPS, 20.0, 5.0, 10.0),
    ]
    for slot, (name, is_captain, role, mining, commerce, piloting) in enumerate(crew):
        trait1, trait2 = generate_personality(f"{player_id}:{name}")
        ship.crew.append(CrewMember(
            name=name,
            is_captain=is_captain,
            job_role=role,
            job_slot=slot,
            mining_skill=mining,
            commerce_skill=commerce,
            piloting_skill=piloting,
            health=100.0,
            personality_trait1=trait1,
            personality_trait2=trait2,
            mastery={},
        ))
    return ship


@router.post("/seed")
async def seed(db: AsyncSession = Depends(get_db)):
    """Idempotent seed: insert locations if not already present."""
    await init_db()
    added = await seed_locations(db)
    return {"seeded": {"locations": added}, "message": "Seed complete"}


@router.post("/players", response_model=PlayerOut, status_code=201)
async def create_player(req: PlayerCreate, db: AsyncSession = Depends(get_db)):
    exists = (await db.execute(
        select(Player).where(Player.username == req.username)
    )).scalar_one_or_none()
    if exists:
        raise HTTPException(status_code=409, detail="Username already taken")
    player = Player(
        username=req.username,
        credits=settings.STARTING_CREDITS,
        lifetime_credits_earned=0,
        game_time=0.0,
    )
    db.add(player)
    await db.commit()
    logger.info("Created player %s", req.username)
    return PlayerOut.model_validate(await _load_player(db, player.id))


@router.get("/players/{player_id}", response_model=PlayerOut)
async def get_player(player_id: int, db: AsyncSession = Depends(get_db)):
    return PlayerOut.model_validate(await _load_player(db, player_id))


@router.get("/players/{player_id}/log", response_model=list[LogEntryOut])
async def get_log(player_id: int, db: AsyncSession = Depends(get_db)):
    player = await _load_player(db, player_id)
    return [LogEntryOut.model_validate(e) for e in player.log_entries]


@router.post("/give-starter-pack/{player_id}")
async def give_starter_pack(player_id: int, db: AsyncSession = Depends(get_db)):
    """Give a player the Perseverance parked at the starter mine. Idempotent."""
    player = await _load_player(db, player_id)
    if player.ships:
        return {"message": "Player already has ships", "ship_id": player.ships[0].id}

    location = (await db.execute(
        select(Location).where(Location.key == STARTER_LOCATION_KEY)
    )).scalar_one_or_none()
    if not location:
        raise HTTPException(status_code=400, detail="No locations seeded. Run /admin/seed first.")

    ship = build_starter_ship(player.id, location)
    player.ships.append(ship)
    db.add(player)
    await db.commit()
    logger.info("Starter pack granted to %s (ship %d)", player.username, ship.id)
    return {"message": "Starter pack granted", "ship_id": ship.id, "location": location.key}


@router.post("/tick")
async def run_tick(dt: float | None = None, db: AsyncSession = Depends(get_db)):
    """Advance the game by dt (default one tick interval) and publish the resulting events."""
    try:
        events = await process_mining_tick(db, dt if dt is not None else settings.TICK_INTERVAL)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    await db.commit()
    for event in events:
        await event_bus.publish(event)
    return {"total_ticks": get_total_ticks(), "events": events}


@router.put("/ships/{ship_id}/location", response_model=ShipOut)
async def relocate_ship(ship_id: int, req: RelocateRequest, db: AsyncSession = Depends(get_db)):
    """Park a ship at a location without simulating the trip."""
    ship = (await db.execute(select(Ship).where(Ship.id == ship_id))).scalar_one_or_none()
    if not ship:
        raise HTTPException(status_code=404, detail="Ship not found")
    location = (await db.execute(
        select(Location).where(Location.key == req.location_key)
    )).scalar_one_or_none()
    if not location:
        raise HTTPException(status_code=404, detail=f"Unknown location: {req.location_key}")
    ship.location = location
    ship.orbiting_location_id = location.id
    db.add(ship)
    await db.commit()
    logger.info("Ship %s moved to %s", ship.ship_name, location.key)
    return ShipOut.model_validate(ship)
