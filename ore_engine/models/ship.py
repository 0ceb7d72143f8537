from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ore_engine.database import Base, JSONType


class Ship(Base):
    __tablename__ = "ships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    player_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=True, index=True
    )

    ship_name: Mapped[str] = mapped_column(String(64), nullable=False)

    cargo_capacity_kg: Mapped[float] = mapped_column(Float, nullable=False)
    # Provisions, crew gear and other hold contents owned by other subsystems
    non_ore_cargo_kg: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    orbiting_location_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True
    )

    # {ore_id: whole units}
    ore_cargo: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    # {ore_id: fractional progress in [0, 1)}
    mining_accumulator: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    # Player-chosen ore; never cleared by the mining engine
    selected_ore_id: Mapped[str | None] = mapped_column(String(32), nullable=True)

    credits_earned: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    player: Mapped["Player | None"] = relationship("Player", back_populates="ships")  # noqa: F821
    location: Mapped["Location | None"] = relationship("Location", lazy="selectin")  # noqa: F821
    crew: Mapped[list["CrewMember"]] = relationship(  # noqa: F821
        "CrewMember", back_populates="ship", lazy="selectin",
        order_by="[CrewMember.job_slot, CrewMember.id]",
    )
    equipment: Mapped[list["EquipmentInstance"]] = relationship(  # noqa: F821
        "EquipmentInstance", back_populates="ship", lazy="selectin",
        order_by="EquipmentInstance.id", cascade="all, delete-orphan",
    )

    def cargo_quantity(self, ore_id: str) -> int:
        return int((self.ore_cargo or {}).get(ore_id, 0))

    def __repr__(self) -> str:
        return f"<Ship id={self.id} name={self.ship_name!r}>"
