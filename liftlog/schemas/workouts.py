from __future__ import annotations

from datetime import datetime

from pydantic import Field

from liftlog.schemas.common import CamelModel, Count, RequestModel, RowId
from liftlog.schemas.exercises import ExerciseResponse


class WorkoutCreateRequest(RequestModel):
    exercises: list[RowId] = Field(default_factory=list)
    notes: str | None = None


class WorkoutUpdateRequest(RequestModel):
    exercises: list[RowId]
    notes: str | None = None


class ExerciseDetailInput(RequestModel):
    exercise_id: RowId
    # weight is stored as NUMERIC(8, 2)
    weight: float | None = Field(default=None, ge=0, le=999999.99)
    reps: Count | None = None
    sets: Count | None = None


class WorkoutExerciseDetailsRequest(RequestModel):
    exercises: list[ExerciseDetailInput] = Field(min_length=1)


class WorkoutsForUserQuery(RequestModel):
    username: str = Field(min_length=1, max_length=25)


class WorkoutResponse(CamelModel):
    id: int
    username: str
    date: datetime
    exercises: list[int] = Field(default_factory=list)
    notes: str | None = None


class WorkoutExerciseResponse(ExerciseResponse):
    sets: int | None = None
    reps: int | None = None
    weight: float | None = None


class WorkoutDetailResponse(CamelModel):
    id: int
    username: str
    date: datetime
    exercises: list[WorkoutExerciseResponse] = Field(default_factory=list)
    notes: str | None = None


class ExerciseDetailResponse(CamelModel):
    exercise_id: int
    weight: float | None = None
    reps: int | None = None
    sets: int | None = None


class WorkoutExerciseDetailsResponse(CamelModel):
    workout_id: int
    exercises: list[ExerciseDetailResponse] = Field(default_factory=list)


class WorkoutEnvelope(CamelModel):
    workout: WorkoutResponse


class WorkoutDetailEnvelope(CamelModel):
    workout: WorkoutDetailResponse


class WorkoutExerciseDetailsEnvelope(CamelModel):
    workout: WorkoutExerciseDetailsResponse


class WorkoutListEnvelope(CamelModel):
    workouts: list[WorkoutResponse] = Field(default_factory=list)
