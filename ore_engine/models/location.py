from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ore_engine.database import Base, JSONType


# Location types
PLANET = "planet"
SPACE_STATION = "space_station"
ORBITAL = "orbital"
MOON = "moon"
ASTEROID_BELT = "asteroid_belt"
PLANETOID = "planetoid"

# Services
SERVICE_MINE = "mine"
SERVICE_TRADE = "trade"
SERVICE_REFUEL = "refuel"
SERVICE_REPAIR = "repair"
SERVICE_HIRE = "hire"


class Location(Base):
    """A place ships can orbit; some of them can be mined."""

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    location_type: Mapped[str] = mapped_column(String(32), nullable=False)

    # ["mine", "trade", ...]
    services: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    # {ore_id: yield_multiplier}  e.g. {"iron_ore": 1.0, "silicate": 1.2}
    ore_offerings: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)

    def has_service(self, service: str) -> bool:
        return service in (self.services or [])

    @property
    def can_be_mined(self) -> bool:
        return self.has_service(SERVICE_MINE) and bool(self.ore_offerings)

    def __repr__(self) -> str:
        return f"<Location id={self.id} key={self.key!r} type={self.location_type}>"
