from __future__ import annotations
import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from ore_engine.config import settings
from ore_engine.models.player import Player
from ore_engine.models.ship import Ship
from ore_engine.simulation.collaborators import DEFAULT_COLLABORATORS, Collaborators
from ore_engine.simulation.extraction import apply_mining_tick

logger = logging.getLogger(__name__)

_total_ticks: int = 0

# Slack for float intervals such as 0.1 × 3
_INTERVAL_TOLERANCE = 1e-6

def get_total_ticks() -> int:
    return _total_ticks

def ticks_for_interval(dt: float) -> int:
    """Number of whole mining ticks covered by dt game seconds."""
    count = round(dt / settings.TICK_INTERVAL)
    if count < 1 or abs(count * settings.TICK_INTERVAL - dt) > _INTERVAL_TOLERANCE:
        raise ValueError(
            f'dt={dt} is not a positive whole multiple of the {settings.TICK_INTERVAL}s tick interval'
        )
    return count

async def process_mining_tick(
    db: AsyncSession, dt: float, collaborators: Collaborators = DEFAULT_COLLABORATORS,
) -> list[dict]:
    """Advance every player by dt, running one mining tick per elapsed tick interval."""
    global _total_ticks
    ticks = ticks_for_interval(dt)
    _total_ticks += ticks
    events: list[dict] = []
    try:
        events += await _process_mining(db, dt, ticks, collaborators)
    except Exception as exc:
        logger.exception('Tick %d failed: %s', _total_ticks, exc)
    return events

async def _process_mining(
    db: AsyncSession, dt: float, ticks: int, collaborators: Collaborators,
) -> list[dict]:
    events: list[dict] = []
    result = await db.execute(select(Player))
    players = list(result.scalars().all())
    for player in players:
        player.game_time = (player.game_time or 0.0) + dt
        for ship in player.ships:
            if ship.location is None:
                continue
            for _ in range(ticks):
                events += _mine_ship(player, ship, collaborators)
        db.add(player)
    return events

def _mine_ship(player: Player, ship: Ship, collaborators: Collaborators) -> list[dict]:
    outcome = apply_mining_tick(ship, ship.location, collaborators)
    if outcome is None:
        return []
    events: list[dict] = []
    if outcome.total_units > 0:
        events.append({'type': 'mining_tick', 'player_id': player.id, 'ship_id': ship.id,
            'location': ship.location.key, 'ore_extracted': dict(outcome.ore_extracted)})
    if outcome.hold_full:
        events.append({'type': 'hold_full', 'player_id': player.id, 'ship_id': ship.id})
    for level_up in outcome.mastery_level_ups:
        logger.info('Ship %s: %s reached %s mastery %d',
            ship.ship_name, level_up.crew_name, level_up.ore_name, level_up.new_level)
        events.append({'type': 'mastery_level_up', 'player_id': player.id, 'ship_id': ship.id,
            'crew_name': level_up.crew_name, 'ore_name': level_up.ore_name,
            'new_level': level_up.new_level})
    return events
