from __future__ import annotations

from sqlalchemy import JSON, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.db.session import Base


class Exercise(Base):
    __tablename__ = "exercises"
    __table_args__ = (
        Index("exercises_body_part", "body_part"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    body_part: Mapped[str] = mapped_column(Text, nullable=False)
    equipment: Mapped[str] = mapped_column(Text, nullable=False)
    gif_url: Mapped[str] = mapped_column(Text, nullable=False)
    target: Mapped[str] = mapped_column(Text, nullable=False)
    secondary_muscles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    instructions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
