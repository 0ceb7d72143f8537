"""Equipment wear from mining."""

import pytest

from ore_engine.simulation.extraction import apply_mining_tick
from ore_engine.simulation.wear import apply_mining_wear, wear_amount

from conftest import make_crew, make_equipment, make_ship

HALF_POOL = {"mining": {"items": {}, "pool": {"xp": 4500.0, "max_xp": 9000.0}}}


class TestWearAmount:
    def test_base_wear(self):
        assert wear_amount() == pytest.approx(0.005)

    def test_pool_reduction(self):
        assert wear_amount(0.1) == pytest.approx(0.0045)

    def test_clamped_at_100(self):
        gear = make_equipment(1, degradation=99.999)
        apply_mining_wear([gear])
        assert gear.degradation == 100.0


class TestWearDuringTick:
    def test_only_claimed_gear_wears(self, belt):
        miner = make_crew(1, mining_skill=30)
        rig = make_equipment(1, "mining_rig")
        spare = make_equipment(2, "mining_laser")
        ship = make_ship(location=belt, crew=[miner], equipment=[rig, spare])
        apply_mining_tick(ship, belt)
        assert rig.degradation == pytest.approx(0.005)
        assert spare.degradation == 0.0

    def test_degradation_is_monotonic(self, belt):
        gear = make_equipment(1, degradation=42.0)
        ship = make_ship(location=belt, equipment=[gear])
        before = gear.degradation
        for _ in range(10):
            apply_mining_tick(ship, belt)
            assert gear.degradation >= before
            before = gear.degradation
        assert gear.degradation <= 100.0

    def test_gear_wears_even_when_miner_idles(self):
        from conftest import make_location
        location = make_location(offerings={"copper_ore": 1.0})
        miner = make_crew(1, mining_skill=0)
        laser = make_equipment(1)
        ship = make_ship(location=location, crew=[miner], equipment=[laser])
        apply_mining_tick(ship, location)
        assert laser.degradation == pytest.approx(0.005)

    def test_worn_out_gear_keeps_mining(self, belt):
        gear = make_equipment(1, "mining_rig", degradation=100.0)
        miner = make_crew(1, mining_skill=30)
        ship = make_ship(location=belt, crew=[miner], equipment=[gear])
        result = apply_mining_tick(ship, belt)
        assert result.passes[0].ore_yield == pytest.approx(0.26)
        assert gear.degradation == 100.0

    def test_lead_miner_pool_reduces_wear(self, belt):
        lead = make_crew(1, mining_skill=60, job_slot=1, mastery=HALF_POOL)
        junior = make_crew(2, mining_skill=10, job_slot=0)
        gear = [make_equipment(1), make_equipment(2)]
        ship = make_ship(location=belt, crew=[lead, junior], equipment=gear)
        apply_mining_tick(ship, belt)
        assert [g.degradation for g in gear] == [pytest.approx(0.0045)] * 2
