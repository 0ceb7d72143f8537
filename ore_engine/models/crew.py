from sqlalchemy import Boolean, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ore_engine.database import Base, JSONType


# Job roles. Only mining_ops matters to the extraction engine
MINING_OPS = "mining_ops"
HELM = "helm"
GALLEY = "galley"

JOB_ROLE_NAMES = {
    MINING_OPS: "Mining Ops",
    HELM: "Helm",
    GALLEY: "Galley",
}

# Mastery skill keys
MINING = "mining"
COMMERCE = "commerce"


class CrewMember(Base):
    __tablename__ = "crew_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    ship_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("ships.id", ondelete="SET NULL"), nullable=True, index=True
    )

    name: Mapped[str] = mapped_column(String(64), nullable=False)
    is_captain: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # None = unassigned; job_slot orders crew within a role
    job_role: Mapped[str | None] = mapped_column(String(32), nullable=True)
    job_slot: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Skills are 0..100; fractional progress is kept
    mining_skill: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    commerce_skill: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    piloting_skill: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    health: Mapped[float] = mapped_column(Float, default=100.0, nullable=False)

    personality_trait1: Mapped[str | None] = mapped_column(String(16), nullable=True)
    personality_trait2: Mapped[str | None] = mapped_column(String(16), nullable=True)

    # {skill: {"items": {key: {"xp": float, "level": int}}, "pool": {"xp": float, "max_xp": float}}}
    mastery: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)

    # Relationships
    ship: Mapped["Ship | None"] = relationship("Ship", back_populates="crew")  # noqa: F821

    @property
    def job_role_name(self) -> str:
        return JOB_ROLE_NAMES.get(self.job_role or "", "Unassigned")

    def __repr__(self) -> str:
        return f"<CrewMember id={self.id} name={self.name!r} ship_id={self.ship_id}>"
