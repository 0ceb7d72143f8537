from sqlalchemy import Boolean, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ore_engine.database import Base


class EquipmentInstance(Base):
    __tablename__ = "equipment_instances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    ship_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("ships.id", ondelete="CASCADE"), nullable=True, index=True
    )

    kind_id: Mapped[str] = mapped_column(String(32), nullable=False)
    # 0 = new, 100 = fully worn
    degradation: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    # Owned by the power allocation subsystem
    powered: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    ship: Mapped["Ship | None"] = relationship("Ship", back_populates="equipment")  # noqa: F821

    def __repr__(self) -> str:
        return f"<EquipmentInstance id={self.id} kind={self.kind_id} degradation={self.degradation:.3f}>"
