"""Captain, personality, health and job collaborators."""

import pytest

from ore_engine.crew.captain import (
    acting_captain,
    command_mining_bonus,
    fleet_aura_income_multiplier,
    ship_commander,
)
from ore_engine.crew.health import health_efficiency
from ore_engine.crew.jobs import crew_assigned_to_role
from ore_engine.crew.personality import ALL_TRAITS, generate_personality, trait_modifier
from ore_engine.models.crew import HELM, MINING_OPS

from conftest import make_crew, make_location, make_ship


class TestCaptain:
    def test_mining_bonus_needs_captain_aboard(self):
        captain = make_crew(1, mining_skill=40, is_captain=True, job_role=HELM)
        assert command_mining_bonus(make_ship(crew=[captain])) == 0.4
        assert command_mining_bonus(make_ship(crew=[make_crew(2, mining_skill=90)])) == 0.0

    def test_acting_captain_is_best_trader(self):
        ship = make_ship(crew=[make_crew(1, commerce_skill=10), make_crew(2, commerce_skill=30)])
        assert acting_captain(ship).id == 2
        assert ship_commander(ship).id == 2

    def test_captain_commands_when_aboard(self):
        captain = make_crew(1, is_captain=True, commerce_skill=0)
        ship = make_ship(crew=[captain, make_crew(2, commerce_skill=80)])
        assert ship_commander(ship).id == 1

    def test_empty_ship_has_no_commander(self):
        assert ship_commander(make_ship()) is None

    def test_fleet_aura(self):
        here = make_location(id=1)
        there = make_location(id=2, key="luna")
        ship = make_ship(id=1, location=here)
        fleet = [ship] + [make_ship(id=i, location=here) for i in range(2, 7)] + [make_ship(id=9, location=there)]
        assert fleet_aura_income_multiplier(ship, fleet[:2]) == 1.05
        assert fleet_aura_income_multiplier(ship, fleet) == 1.15
        assert fleet_aura_income_multiplier(make_ship(id=10), fleet) == 1.0


class TestPersonality:
    def test_deterministic_and_distinct(self):
        first = generate_personality("crew-7")
        assert first == generate_personality("crew-7")
        assert first[0] != first[1]
        assert set(first) <= set(ALL_TRAITS)

    def test_trait_modifier(self):
        assert trait_modifier(make_crew(1, traits=("cautious", "stoic")), "mining_yield") == pytest.approx(0.95)
        assert trait_modifier(make_crew(1), "mining_yield") == 1.0


class TestHealth:
    def test_efficiency_curve(self):
        assert health_efficiency(100) == 1.0
        assert health_efficiency(75) == 1.0
        assert health_efficiency(0) == 0.4
        assert 0.4 < health_efficiency(50) < 1.0
        assert health_efficiency(None) == 1.0


class TestJobs:
    def test_role_filter_in_slot_order(self):
        ship = make_ship(crew=[
            make_crew(1, job_slot=2),
            make_crew(2, job_role=HELM, job_slot=0),
            make_crew(3, job_slot=0),
        ])
        assert [c.id for c in crew_assigned_to_role(ship, MINING_OPS)] == [3, 1]
