from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liftlog.core.errors import BadRequestError, NotFoundError
from liftlog.db.models.exercise import Exercise
from liftlog.db.session import atomic
from liftlog.db.sql import sql_for_partial_update
from liftlog.schemas.exercises import ExerciseResponse

EXERCISE_COLUMNS = {
    "bodyPart": "body_part",
    "gifUrl": "gif_url",
    "secondaryMuscles": "secondary_muscles",
}


class ExerciseRepository:
    """The shared exercise catalog."""

    def __init__(self, db: Session):
        self.db = db

    def _name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        stmt = select(Exercise.id).where(Exercise.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Exercise.id != exclude_id)
        return self.db.execute(stmt).first() is not None

    def create(self, fields: Mapping[str, Any]) -> ExerciseResponse:
        name = fields["name"]
        if self._name_taken(name):
            raise BadRequestError(f"Duplicate exercise: {name}")

        exercise = Exercise(
            name=name,
            body_part=fields["body_part"],
            equipment=fields["equipment"],
            gif_url=fields["gif_url"],
            target=fields["target"],
            secondary_muscles=list(fields.get("secondary_muscles") or []),
            instructions=list(fields.get("instructions") or []),
        )
        try:
            with atomic(self.db):
                self.db.add(exercise)
                self.db.flush()
        except IntegrityError:
            raise BadRequestError(f"Duplicate exercise: {name}") from None

        return ExerciseResponse.model_validate(exercise)

    def find_all(self, name: str | None = None, body_part: str | None = None) -> list[ExerciseResponse]:
        """List the catalog, optionally filtered.

        A name filter is a case-insensitive substring match and wins over a
        body part filter, which must match exactly. Results are always
        ordered by name.
        """
        stmt = select(Exercise)
        if name:
            stmt = stmt.where(Exercise.name.ilike(f"%{name}%"))
        elif body_part:
            stmt = stmt.where(Exercise.body_part == body_part)
        stmt = stmt.order_by(Exercise.name)

        return [ExerciseResponse.model_validate(row) for row in self.db.execute(stmt).scalars().all()]

    def find_by_id(self, exercise_id: int) -> ExerciseResponse:
        exercise = self.db.get(Exercise, exercise_id)
        if exercise is None:
            raise NotFoundError(f"No exercise with id: {exercise_id}")
        return ExerciseResponse.model_validate(exercise)

    def update(self, exercise_id: int, data: Mapping[str, Any]) -> ExerciseResponse:
        """Apply a partial update given in wire names (``bodyPart``, ``gifUrl``...)."""
        partial = sql_for_partial_update(data, EXERCISE_COLUMNS)

        new_name = partial.assignments.get("name")
        if new_name is not None and self._name_taken(new_name, exclude_id=exercise_id):
            raise BadRequestError(f"Duplicate exercise: {new_name}")

        try:
            with atomic(self.db):
                result = self.db.execute(
                    update(Exercise).where(Exercise.id == exercise_id).values(partial.assignments)
                )
                if result.rowcount == 0:
                    raise NotFoundError(f"No exercise with id: {exercise_id}")
        except IntegrityError:
            raise BadRequestError(f"Duplicate exercise: {new_name}") from None

        return self.find_by_id(exercise_id)

    def delete(self, exercise_id: int) -> None:
        with atomic(self.db):
            result = self.db.execute(delete(Exercise).where(Exercise.id == exercise_id))
            if result.rowcount == 0:
                raise NotFoundError(f"No exercise with id: {exercise_id}")
