from ore_engine.models.crew import CrewMember
from ore_engine.models.equipment import EquipmentInstance
from ore_engine.models.location import Location
from ore_engine.models.log_entry import LogEntry
from ore_engine.models.player import Player
from ore_engine.models.ship import Ship

__all__ = [
    "CrewMember",
    "EquipmentInstance",
    "Location",
    "LogEntry",
    "Player",
    "Ship",
]
