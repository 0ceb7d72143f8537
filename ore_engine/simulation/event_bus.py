"""
In-memory pub/sub for Server-Sent Events.

SSE connections subscribe to the EventBus singleton. Tick passes and sales
publish dicts; each SSE handler drains its own queue, optionally filtered to
one player's events.
"""

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._subscribers: dict[asyncio.Queue[dict], int | None] = {}

    def subscribe(self, player_id: int | None = None) -> asyncio.Queue[dict]:
        """Register a client. player_id=None receives every event."""
        q: asyncio.Queue[dict] = asyncio.Queue(maxsize=200)
        self._subscribers[q] = player_id
        logger.debug("EventBus: new subscriber (total=%d)", len(self._subscribers))
        return q

    def unsubscribe(self, q: asyncio.Queue[dict]) -> None:
        if q in self._subscribers:
            del self._subscribers[q]
            logger.debug("EventBus: subscriber removed (total=%d)", len(self._subscribers))

    async def publish(self, event: dict) -> None:
        """Deliver to matching subscribers. Drops for slow clients."""
        target = event.get("player_id")
        for q, player_id in list(self._subscribers.items()):
            if player_id is not None and target is not None and target != player_id:
                continue
            try:
                q.put_nowait(event)
            except asyncio.QueueFull:
                # Never block the simulation on a slow client
                logger.warning("EventBus: dropped %s event for slow subscriber", event.get("type"))

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


# Module-level singleton, import this everywhere
event_bus = EventBus()
