"""
Shared pytest fixtures for the ore engine tests.

Provides:
  - In-memory SQLite database for the API tests (set before any app import)
  - Factories for transient ORM instances (no database needed by the engine)
  - Random sources that make the double-extraction roll deterministic
"""

import os
import random

import pytest

# Must be set before ore_engine.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from ore_engine.models.crew import MINING_OPS, CrewMember  # noqa: E402
from ore_engine.models.equipment import EquipmentInstance  # noqa: E402
from ore_engine.models.location import (  # noqa: E402
    ASTEROID_BELT, SERVICE_MINE, SERVICE_TRADE, SPACE_STATION, Location,
)
from ore_engine.models.player import Player  # noqa: E402
from ore_engine.models.ship import Ship  # noqa: E402


class AlwaysRoll(random.Random):
    """Every probability check succeeds."""

    def random(self):
        return 0.0


class NeverRoll(random.Random):
    def random(self):
        return 0.999999


# ── Factories ───────────────────────────────────────────────────────────────

def make_location(
    id=1,
    key="debris_field_alpha",
    location_type=ASTEROID_BELT,
    services=(SERVICE_MINE,),
    offerings=None,
):
    return Location(
        id=id,
        key=key,
        name=key.replace("_", " ").title(),
        location_type=location_type,
        services=list(services),
        ore_offerings=dict({"iron_ore": 1.0, "silicate": 1.0} if offerings is None else offerings),
    )


def make_equipment(id, kind_id="mining_laser", degradation=0.0, powered=True):
    return EquipmentInstance(id=id, kind_id=kind_id, degradation=degradation, powered=powered)


def make_crew(
    id,
    name=None,
    mining_skill=0.0,
    commerce_skill=0.0,
    job_role=MINING_OPS,
    job_slot=0,
    is_captain=False,
    health=100.0,
    mastery=None,
    traits=(None, None),
):
    return CrewMember(
        id=id,
        name=name or f"Crew {id}",
        is_captain=is_captain,
        job_role=job_role,
        job_slot=job_slot,
        mining_skill=mining_skill,
        commerce_skill=commerce_skill,
        piloting_skill=0.0,
        health=health,
        personality_trait1=traits[0],
        personality_trait2=traits[1],
        mastery=dict(mastery or {}),
    )


def make_ship(
    id=1,
    location=None,
    crew=(),
    equipment=(),
    cargo=None,
    accumulator=None,
    capacity_kg=2000.0,
    non_ore_kg=0.0,
    selected_ore_id=None,
):
    ship = Ship(
        id=id,
        ship_name=f"Ship {id}",
        cargo_capacity_kg=capacity_kg,
        non_ore_cargo_kg=non_ore_kg,
        orbiting_location_id=location.id if location is not None else None,
        ore_cargo=dict(cargo or {}),
        mining_accumulator=dict(accumulator or {}),
        selected_ore_id=selected_ore_id,
        credits_earned=0,
    )
    ship.location = location
    ship.crew = list(crew)
    ship.equipment = list(equipment)
    return ship


def make_player(ships=(), credits=5000):
    player = Player(id=1, username="tester", credits=credits, lifetime_credits_earned=0, game_time=0.0)
    player.ships = list(ships)
    player.log_entries = []
    return player


# ── Fixtures ────────────────────────────────────────────────────────────────

@pytest.fixture()
def belt():
    return make_location()


@pytest.fixture()
def station():
    return make_location(
        id=2, key="leo_station", location_type=SPACE_STATION,
        services=(SERVICE_TRADE,), offerings={},
    )
