from __future__ import annotations
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from ore_engine.catalog.ores import find_ore
from ore_engine.database import get_db
from ore_engine.deps import fleet_ship, get_player
from ore_engine.economy.market import ore_sell_price, sell_all_ore, sell_ore
from ore_engine.economy.resource_cost import check_resource_cost, deduct_resource_cost, format_resource_cost
from ore_engine.logbook import append_log
from ore_engine.models.location import SERVICE_TRADE, Location
from ore_engine.models.player import Player
from ore_engine.models.ship import Ship
from ore_engine.schemas.economy import (
    OrePriceOut, ResourceCheckOut, ResourceCostRequest, ResourceRowOut, SaleOut, SellRequest,
    ShortfallOut,
)
from ore_engine.simulation.event_bus import event_bus

router = APIRouter(prefix="/economy", tags=["economy"])
logger = logging.getLogger(__name__)


def _ship_location(ship: Ship) -> Location:
    if ship.location is None:
        raise HTTPException(status_code=409, detail="Ship is not at a location")
    return ship.location


def _trade_location(ship: Ship) -> Location:
    location = _ship_location(ship)
    if not location.has_service(SERVICE_TRADE):
        raise HTTPException(status_code=409, detail=f"{location.name} has no ore market")
    return location


def _sale_out(ship: Ship, player: Player, credits: int) -> SaleOut:
    return SaleOut(
        ship_id=ship.id,
        credits_earned=credits,
        credits_balance=player.credits,
        ore_cargo=dict(ship.ore_cargo or {}),
    )


def _requirement_rows(required: dict[str, int]) -> list[ResourceRowOut]:
    return [ResourceRowOut(**row) for row in format_resource_cost(required)]


@router.get("/{player_id}/ships/{ship_id}/prices", response_model=list[OrePriceOut])
async def ore_prices(ship_id: int, player: Player = Depends(get_player)):
    ship = fleet_ship(player, ship_id)
    location = _trade_location(ship)
    prices = []
    for ore_id, held in (ship.ore_cargo or {}).items():
        ore = find_ore(ore_id)
        if ore is None:
            continue
        prices.append(OrePriceOut(
            ore_id=ore.id, name=ore.name,
            unit_price=ore_sell_price(ore, location, ship), held=held,
        ))
    return prices


@router.post("/{player_id}/ships/{ship_id}/sell", response_model=SaleOut)
async def sell(
    ship_id: int,
    req: SellRequest,
    player: Player = Depends(get_player),
    db: AsyncSession = Depends(get_db),
):
    ship = fleet_ship(player, ship_id)
    location = _trade_location(ship)
    if find_ore(req.ore_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown ore: {req.ore_id}")
    held = ship.cargo_quantity(req.ore_id)
    if held < req.quantity:
        raise HTTPException(
            status_code=409, detail=f"Only {held} units of {req.ore_id} in the hold",
        )
    credits = sell_ore(ship, req.ore_id, req.quantity, location, player)
    db.add(player)
    await db.commit()
    await event_bus.publish({'type': 'ore_sold', 'player_id': player.id, 'ship_id': ship.id,
        'ore_id': req.ore_id, 'quantity': req.quantity, 'credits': credits})
    return _sale_out(ship, player, credits)


@router.post("/{player_id}/ships/{ship_id}/sell-all", response_model=SaleOut)
async def sell_all(
    ship_id: int,
    player: Player = Depends(get_player),
    db: AsyncSession = Depends(get_db),
):
    ship = fleet_ship(player, ship_id)
    location = _trade_location(ship)
    credits = sell_all_ore(ship, location, player)
    db.add(player)
    await db.commit()
    if credits > 0:
        await event_bus.publish({'type': 'ore_sold', 'player_id': player.id,
            'ship_id': ship.id, 'credits': credits})
    return _sale_out(ship, player, credits)


@router.post("/{player_id}/resource-cost/check", response_model=ResourceCheckOut)
async def check_cost(req: ResourceCostRequest, player: Player = Depends(get_player)):
    shortfalls = check_resource_cost(player.ships, req.requirements)
    return ResourceCheckOut(
        affordable=not shortfalls,
        shortfalls=[ShortfallOut.model_validate(s) for s in shortfalls],
        requirements=_requirement_rows(req.requirements),
    )


@router.post("/{player_id}/resource-cost/deduct", response_model=ResourceCheckOut)
async def deduct_cost(
    req: ResourceCostRequest,
    player: Player = Depends(get_player),
    db: AsyncSession = Depends(get_db),
):
    shortfalls = check_resource_cost(player.ships, req.requirements)
    if shortfalls:
        missing = ", ".join(f"{s.name} ({s.available}/{s.required})" for s in shortfalls)
        logger.info("Player %d: resource deduction refused, short on %s", player.id, missing)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Insufficient ore: {missing}")
    deduct_resource_cost(player.ships, req.requirements)
    spent = ", ".join(f"{amount} {ore_id}" for ore_id, amount in req.requirements.items())
    append_log(player.log_entries, player.game_time, "resources_spent",
        f"Fleet spent {spent}", None, {"requirements": dict(req.requirements)})
    db.add(player)
    await db.commit()
    return ResourceCheckOut(
        affordable=True, shortfalls=[], requirements=_requirement_rows(req.requirements),
    )
