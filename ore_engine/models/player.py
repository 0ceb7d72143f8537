from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ore_engine.database import Base


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    credits: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    lifetime_credits_earned: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Simulated seconds since the company was founded
    game_time: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships; fleet order is ship id order
    ships: Mapped[list["Ship"]] = relationship(  # noqa: F821
        "Ship", back_populates="player", lazy="selectin", order_by="Ship.id"
    )
    log_entries: Mapped[list["LogEntry"]] = relationship(  # noqa: F821
        "LogEntry", back_populates="player", lazy="selectin",
        order_by="LogEntry.id", cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Player id={self.id} username={self.username!r} credits={self.credits}>"
