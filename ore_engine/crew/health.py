from __future__ import annotations

FULL_EFFICIENCY_HEALTH = 75.0
MIN_EFFICIENCY = 0.4


def health_efficiency(health: float | None) -> float:
    """Work efficiency in (0, 1]: full at 75+ health, falling linearly to 0.4 at 0."""
    if health is None or health >= FULL_EFFICIENCY_HEALTH:
        return 1.0
    clamped = max(0.0, health)
    return MIN_EFFICIENCY + (1.0 - MIN_EFFICIENCY) * clamped / FULL_EFFICIENCY_HEALTH
