from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.db.session import Base


class Workout(Base):
    __tablename__ = "workouts"
    __table_args__ = (
        Index("workouts_user_time", "username", text("date DESC")),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(25),
        ForeignKey("users.username", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # Ordered exercise ids as submitted. Not a foreign key: ids of exercises
    # deleted later stay here.
    exercises: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
