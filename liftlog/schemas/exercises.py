from __future__ import annotations

from pydantic import Field

from liftlog.schemas.common import CamelModel, PatchModel, RequestModel


class ExerciseCreateRequest(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    body_part: str = Field(min_length=1)
    equipment: str = Field(min_length=1)
    gif_url: str = Field(min_length=1)
    target: str = Field(min_length=1)
    secondary_muscles: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


class ExerciseUpdateRequest(PatchModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    body_part: str | None = Field(default=None, min_length=1)
    equipment: str | None = Field(default=None, min_length=1)
    gif_url: str | None = Field(default=None, min_length=1)
    target: str | None = Field(default=None, min_length=1)
    secondary_muscles: list[str] | None = None
    instructions: list[str] | None = None


class ExerciseResponse(CamelModel):
    id: int
    name: str
    body_part: str
    equipment: str
    gif_url: str
    target: str
    secondary_muscles: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


class ExerciseEnvelope(CamelModel):
    exercise: ExerciseResponse


class ExerciseListEnvelope(CamelModel):
    exercises: list[ExerciseResponse] = Field(default_factory=list)
