import logging

from fastapi import APIRouter, Depends, Query, Request, status

from liftlog.api.deps import IdPath, get_exercise_repo
from liftlog.api.policies import ADMIN, LOGGED_IN, require
from liftlog.repositories.exercises import ExerciseRepository
from liftlog.schemas.common import DeletedResponse
from liftlog.schemas.exercises import (
    ExerciseCreateRequest,
    ExerciseEnvelope,
    ExerciseListEnvelope,
    ExerciseUpdateRequest,
)

router = APIRouter(prefix="/exercises", tags=["exercises"])
logger = logging.getLogger("liftlog.domain")


@router.get("", response_model=ExerciseListEnvelope, dependencies=[Depends(require(LOGGED_IN))])
def list_exercises(
    name: str | None = Query(default=None),
    body_part: str | None = Query(default=None, alias="bodyPart"),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    return ExerciseListEnvelope(exercises=exercises.find_all(name=name, body_part=body_part))


@router.get("/{exercise_id}", response_model=ExerciseEnvelope, dependencies=[Depends(require(LOGGED_IN))])
def get_exercise(
    exercise_id: IdPath,
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    return ExerciseEnvelope(exercise=exercises.find_by_id(exercise_id))


@router.post(
    "",
    response_model=ExerciseEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require(ADMIN))],
)
def create_exercise(
    payload: ExerciseCreateRequest,
    request: Request,
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    exercise = exercises.create(payload.model_dump())
    logger.info(
        "domain_event event=exercise_created exercise_id=%s request_id=%s",
        exercise.id,
        getattr(request.state, "request_id", None),
    )
    return ExerciseEnvelope(exercise=exercise)


@router.patch("/{exercise_id}", response_model=ExerciseEnvelope, dependencies=[Depends(require(ADMIN))])
def update_exercise(
    exercise_id: IdPath,
    payload: ExerciseUpdateRequest,
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    return ExerciseEnvelope(exercise=exercises.update(exercise_id, payload.changes()))


@router.delete("/{exercise_id}", response_model=DeletedResponse, dependencies=[Depends(require(ADMIN))])
def delete_exercise(
    exercise_id: IdPath,
    request: Request,
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    exercises.delete(exercise_id)
    logger.info(
        "domain_event event=exercise_deleted exercise_id=%s request_id=%s",
        exercise_id,
        getattr(request.state, "request_id", None),
    )
    return DeletedResponse(deleted=exercise_id)
