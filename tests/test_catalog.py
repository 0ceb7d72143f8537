"""Static ore and equipment tables."""

import pytest

from ore_engine.catalog.equipment import (
    get_equipment_kind,
    get_mining_equipment_kind,
    mining_equipment_kinds,
)
from ore_engine.catalog.ores import (
    ORE_CATALOG,
    can_mine_ore,
    find_ore,
    get_ore,
    is_ore_available_at,
    location_ore_yield_multiplier,
    minable_ores,
)


class TestOreCatalog:
    def test_ids_are_unique(self):
        ids = [ore.id for ore in ORE_CATALOG]
        assert len(ids) == len(set(ids))

    def test_iron_ore_values(self):
        iron = get_ore("iron_ore")
        assert iron.base_value == 8
        assert iron.mining_level_required == 0
        assert iron.weight_per_unit == 10.0

    def test_get_unknown_raises(self):
        with pytest.raises(KeyError):
            get_ore("unobtainium")

    def test_find_unknown_returns_none(self):
        assert find_ore("unobtainium") is None
        assert find_ore(None) is None

    def test_skill_uses_floor(self):
        assert can_mine_ore(10.0, "copper_ore")
        assert not can_mine_ore(9.99, "copper_ore")

    def test_minable_ores_at_zero_skill_are_tier_zero(self):
        assert {o.id for o in minable_ores(0)} == {"iron_ore", "silicate"}

    def test_location_multiplier_defaults_to_one(self):
        assert location_ore_yield_multiplier({"iron_ore": 1.5}, "iron_ore") == 1.5
        assert location_ore_yield_multiplier({"iron_ore": 1.5}, "silicate") == 1.0
        assert location_ore_yield_multiplier(None, "silicate") == 1.0

    def test_availability(self):
        assert is_ore_available_at({"iron_ore": 1.0}, "iron_ore")
        assert not is_ore_available_at({"iron_ore": 1.0}, "silicate")
        assert not is_ore_available_at(None, "iron_ore")


class TestEquipmentCatalog:
    def test_mining_kinds_sorted_by_tier(self):
        tiers = [k.mining_level_required for k in mining_equipment_kinds()]
        assert tiers == sorted(tiers)
        assert [k.id for k in mining_equipment_kinds()][0] == "mining_laser"

    def test_non_mining_kind_is_invisible_to_mining(self):
        assert get_equipment_kind("life_support") is not None
        assert get_mining_equipment_kind("life_support") is None
        assert get_mining_equipment_kind("nope") is None

    def test_rates(self):
        assert get_mining_equipment_kind("mining_laser").mining_rate == 1.0
        assert get_mining_equipment_kind("mining_rig").mining_rate == 2.0
