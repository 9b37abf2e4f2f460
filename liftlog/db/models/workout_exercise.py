from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.db.session import Base


class WorkoutExercise(Base):
    __tablename__ = "workouts_exercises"
    __table_args__ = (
        Index("workouts_exercises_order", "workout_id", "position"),
    )

    workout_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("workouts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    exercise_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("exercises.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=True)
