"""In-game event log: the player-facing history of sales, purchases and mining."""

from __future__ import annotations

import logging

from ore_engine.models.log_entry import LogEntry

logger = logging.getLogger(__name__)


def append_log(
    log: list[LogEntry],
    game_time: float,
    kind: str,
    message: str,
    ship_name: str | None = None,
    extra: dict | None = None,
) -> LogEntry:
    entry = LogEntry(
        game_time=game_time,
        kind=kind,
        message=message,
        ship_name=ship_name,
        extra=dict(extra or {}),
    )
    log.append(entry)
    logger.info("[%s] %s", kind, message)
    return entry
