"""
Standalone seed script.

Run from the project root:
    python seed.py

Requires DATABASE_URL to be set (via .env or environment).
"""
from __future__ import annotations

import asyncio

from sqlalchemy import select

from ore_engine.config import settings
from ore_engine.database import AsyncSessionLocal, init_db
from ore_engine.models.location import Location
from ore_engine.models.player import Player
from ore_engine.routers.admin import STARTER_LOCATION_KEY, build_starter_ship, seed_locations

DEMO_USERNAME = "player1"


async def seed_all() -> None:
    print("Initialising database tables...")
    await init_db()

    async with AsyncSessionLocal() as db:
        added = await seed_locations(db)
        print(f"Locations: {added} added")

        existing = (await db.execute(
            select(Player).where(Player.username == DEMO_USERNAME)
        )).scalar_one_or_none()
        if existing:
            print(f"Player '{DEMO_USERNAME}' already exists, skipping demo player creation.")
        else:
            print(f"Creating demo player '{DEMO_USERNAME}'...")
            player = Player(
                username=DEMO_USERNAME,
                credits=settings.STARTING_CREDITS,
                lifetime_credits_earned=0,
                game_time=0.0,
            )
            db.add(player)
            await db.flush()

            location = (await db.execute(
                select(Location).where(Location.key == STARTER_LOCATION_KEY)
            )).scalar_one()
            db.add(build_starter_ship(player.id, location))
            await db.commit()
            print(f"Demo player created with the Perseverance at {location.name}.")

    print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed_all())
