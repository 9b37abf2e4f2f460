from fastapi import APIRouter, Body, Depends, Query

from liftlog.api.deps import get_workout_repo
from liftlog.api.policies import ADMIN, require
from liftlog.core.errors import BadRequestError
from liftlog.repositories.workouts import WorkoutRepository
from liftlog.schemas.workouts import WorkoutListEnvelope, WorkoutsForUserQuery

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("", response_model=WorkoutListEnvelope, dependencies=[Depends(require(ADMIN))])
def list_workouts(
    username: str | None = Query(default=None),
    payload: WorkoutsForUserQuery | None = Body(default=None),
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    """All workouts of one user; the username comes from the JSON body or ``?username=``."""
    target = payload.username if payload is not None else username
    if not target:
        raise BadRequestError("username is required")
    return WorkoutListEnvelope(workouts=workouts.get_all(target))
