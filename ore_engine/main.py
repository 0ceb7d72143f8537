from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ore_engine.config import settings
from ore_engine.database import init_db
from ore_engine.routers import admin, economy, events, mining

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Ore Engine",
    description="Ore extraction and ore economy API.",
    version="0.1.0",
)

# CORS: allow all origins for local dev
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(mining.router)
app.include_router(economy.router)
app.include_router(events.router)
app.include_router(admin.router)


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Ore Engine starting up...")
    await init_db()


@app.get("/")
async def root():
    return {
        "name": "Ore Engine",
        "version": "0.1.0",
        "docs": "/docs",
        "events": "/events/stream",
    }


@app.get("/health")
async def health():
    return {"status": "ok"}
