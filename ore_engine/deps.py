from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ore_engine.database import get_db
from ore_engine.models.player import Player
from ore_engine.models.ship import Ship


async def get_player(player_id: int, db: AsyncSession = Depends(get_db)) -> Player:
    """FastAPI dependency: the player named in the path, with fleet loaded."""
    result = await db.execute(select(Player).where(Player.id == player_id))
    player = result.scalar_one_or_none()
    if player is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    return player


def fleet_ship(player: Player, ship_id: int) -> Ship:
    ship = next((s for s in player.ships if s.id == ship_id), None)
    if ship is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ship not found")
    return ship
