from __future__ import annotations
import asyncio
import json
import logging
from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from ore_engine.simulation.event_bus import event_bus

router = APIRouter(prefix="/events", tags=["events"])
logger = logging.getLogger(__name__)

KEEPALIVE_SECONDS = 30.0


def _sse_line(event: dict) -> str:
    return "data: " + json.dumps(event) + "\n\n"


@router.get("/stream")
async def stream_events(player_id: int | None = None):
    """Server-Sent Events stream of tick and sale events, optionally for one player."""

    async def event_generator():
        q = event_bus.subscribe(player_id)
        try:
            yield _sse_line({"type": "connected", "player_id": player_id})
            while True:
                try:
                    event = await asyncio.wait_for(q.get(), timeout=KEEPALIVE_SECONDS)
                    yield _sse_line(event)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
        finally:
            event_bus.unsubscribe(q)
            logger.info("SSE client disconnected (player %s)", player_id)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )
