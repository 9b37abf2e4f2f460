"""The workout aggregate.

A workout row carries the ordered list of exercise ids it was given. The
``workouts_exercises`` join table mirrors that list as one row per distinct
exercise, in first-occurrence order, and holds the per-exercise detail
(sets, reps, weight) recorded after the fact.

After every create or update the set of exercise ids in the join table equals
the set in ``workouts.exercises``. Both writes happen in one transaction, so
a failure part way through leaves neither behind.

``workouts.exercises`` is a soft reference: deleting an exercise from the
catalog cascades to join rows but leaves the raw id on the workout.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from liftlog.core.errors import BadRequestError, NotFoundError
from liftlog.db.models.exercise import Exercise
from liftlog.db.models.user import User
from liftlog.db.models.workout import Workout
from liftlog.db.models.workout_exercise import WorkoutExercise
from liftlog.db.session import atomic
from liftlog.schemas.workouts import (
    ExerciseDetailResponse,
    WorkoutDetailResponse,
    WorkoutExerciseDetailsResponse,
    WorkoutExerciseResponse,
    WorkoutResponse,
)


def _distinct(ids: Iterable[int]) -> list[int]:
    return list(dict.fromkeys(ids))


class WorkoutRepository:
    def __init__(self, db: Session):
        self.db = db

    def _ensure_exercises_exist(self, exercise_ids: Sequence[int]) -> None:
        wanted = _distinct(exercise_ids)
        if not wanted:
            return
        found = set(self.db.execute(select(Exercise.id).where(Exercise.id.in_(wanted))).scalars().all())
        missing = [exercise_id for exercise_id in wanted if exercise_id not in found]
        if missing:
            raise BadRequestError(f"Exercise not found: {', '.join(str(m) for m in missing)}")

    def _ensure_user_exists(self, username: str) -> None:
        exists = self.db.execute(select(User.username).where(User.username == username)).first()
        if exists is None:
            raise NotFoundError(f"No user: {username}")

    def _insert_join_rows(self, workout_id: int, exercise_ids: Sequence[int]) -> None:
        for position, exercise_id in enumerate(_distinct(exercise_ids)):
            self.db.add(
                WorkoutExercise(
                    workout_id=workout_id,
                    exercise_id=exercise_id,
                    position=position,
                )
            )

    def create(
        self,
        username: str,
        exercises: Sequence[int] = (),
        notes: str | None = None,
    ) -> WorkoutResponse:
        exercises = list(exercises)
        self._ensure_exercises_exist(exercises)
        self._ensure_user_exists(username)

        workout = Workout(
            username=username,
            date=datetime.now(timezone.utc),
            exercises=exercises,
            notes=notes,
        )
        with atomic(self.db):
            self.db.add(workout)
            self.db.flush()
            self._insert_join_rows(workout.id, exercises)

        return WorkoutResponse.model_validate(workout)

    def get_all(self, username: str) -> list[WorkoutResponse]:
        self._ensure_user_exists(username)
        workouts = self.db.execute(
            select(Workout)
            .where(Workout.username == username)
            .order_by(Workout.date.desc(), Workout.id.desc())
        ).scalars().all()
        return [WorkoutResponse.model_validate(workout) for workout in workouts]

    def get(self, workout_id: int) -> WorkoutDetailResponse:
        """Load a workout with each exercise expanded and its recorded detail.

        Exercises come back in the order the workout lists them.
        """
        workout = self.db.get(Workout, workout_id)
        if workout is None:
            raise NotFoundError(f"No workout: {workout_id}")

        rows = self.db.execute(
            select(Exercise, WorkoutExercise)
            .join(WorkoutExercise, WorkoutExercise.exercise_id == Exercise.id)
            .where(WorkoutExercise.workout_id == workout.id)
            .order_by(WorkoutExercise.position.asc())
        ).all()

        exercises = [
            WorkoutExerciseResponse(
                id=exercise.id,
                name=exercise.name,
                body_part=exercise.body_part,
                equipment=exercise.equipment,
                gif_url=exercise.gif_url,
                target=exercise.target,
                secondary_muscles=exercise.secondary_muscles,
                instructions=exercise.instructions,
                sets=pairing.sets,
                reps=pairing.reps,
                weight=pairing.weight,
            )
            for exercise, pairing in rows
        ]
        return WorkoutDetailResponse(
            id=workout.id,
            username=workout.username,
            date=workout.date,
            exercises=exercises,
            notes=workout.notes,
        )

    def owner_of(self, workout_id: int) -> str:
        username = self.db.execute(
            select(Workout.username).where(Workout.id == workout_id)
        ).scalar_one_or_none()
        if username is None:
            raise NotFoundError(f"No workout: {workout_id}")
        return username

    def update(
        self,
        workout_id: int,
        exercises: Sequence[int],
        notes: str | None = None,
    ) -> WorkoutResponse:
        """Replace the exercise list and notes of a workout.

        Join rows are rebuilt from scratch, so detail recorded for any
        exercise, including ones kept in the new list, is discarded.
        """
        exercises = list(exercises)
        self._ensure_exercises_exist(exercises)

        with atomic(self.db):
            result = self.db.execute(
                update(Workout)
                .where(Workout.id == workout_id)
                .values(exercises=exercises, notes=notes)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"No workout: {workout_id}")

            self.db.execute(delete(WorkoutExercise).where(WorkoutExercise.workout_id == workout_id))
            self._insert_join_rows(workout_id, exercises)

        workout = self.db.get(Workout, workout_id, populate_existing=True)
        return WorkoutResponse.model_validate(workout)

    def update_exercise_details(
        self,
        workout_id: int,
        details: Iterable[Mapping[str, Any]],
    ) -> WorkoutExerciseDetailsResponse:
        """Record weight/reps/sets for exercises already in a workout.

        Each entry names an ``exercise_id``. Either every entry is applied or,
        if any pair is missing, none are.
        """
        updated: list[ExerciseDetailResponse] = []
        with atomic(self.db):
            for entry in details:
                exercise_id = entry["exercise_id"]
                result = self.db.execute(
                    update(WorkoutExercise)
                    .where(
                        WorkoutExercise.workout_id == workout_id,
                        WorkoutExercise.exercise_id == exercise_id,
                    )
                    .values(
                        weight=entry.get("weight"),
                        reps=entry.get("reps"),
                        sets=entry.get("sets"),
                    )
                )
                if result.rowcount == 0:
                    raise NotFoundError(f"No workout: {workout_id} or exercise: {exercise_id}")
                updated.append(
                    ExerciseDetailResponse(
                        exercise_id=exercise_id,
                        weight=entry.get("weight"),
                        reps=entry.get("reps"),
                        sets=entry.get("sets"),
                    )
                )

        return WorkoutExerciseDetailsResponse(workout_id=workout_id, exercises=updated)

    def delete(self, workout_id: int) -> None:
        with atomic(self.db):
            result = self.db.execute(delete(Workout).where(Workout.id == workout_id))
            if result.rowcount == 0:
                raise NotFoundError(f"No workout: {workout_id}")
