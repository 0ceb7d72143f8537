from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ore_engine.database import Base, JSONType


class LogEntry(Base):
    __tablename__ = "log_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    player_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=True, index=True
    )

    game_time: Mapped[float] = mapped_column(Float, nullable=False)
    kind: Mapped[str] = mapped_column(String(32), nullable=False)  # "ore_sold", "resources_spent", ...
    message: Mapped[str] = mapped_column(Text, nullable=False)
    ship_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    extra: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)

    player: Mapped["Player | None"] = relationship("Player", back_populates="log_entries")  # noqa: F821

    def __repr__(self) -> str:
        return f"<LogEntry id={self.id} kind={self.kind} t={self.game_time}>"
