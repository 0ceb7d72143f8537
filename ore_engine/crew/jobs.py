from __future__ import annotations

from ore_engine.models.crew import CrewMember
from ore_engine.models.ship import Ship


def crew_assigned_to_role(ship: Ship, role: str) -> list[CrewMember]:
    """Crew holding a job role, in assignment (job slot) order."""
    assigned = [c for c in ship.crew if c.job_role == role]
    return sorted(assigned, key=lambda c: c.job_slot or 0)
