import logging

from fastapi import APIRouter, Depends, Request, status

from liftlog.api.deps import IdPath, get_user_repo, get_workout_repo
from liftlog.api.policies import ADMIN, ADMIN_OR_USER, require
from liftlog.core.errors import NotFoundError
from liftlog.repositories.users import UserRepository
from liftlog.repositories.workouts import WorkoutRepository
from liftlog.schemas.common import DeletedResponse
from liftlog.schemas.users import (
    UserCreateRequest,
    UserDetailEnvelope,
    UserDetailResponse,
    UserEnvelope,
    UserListEnvelope,
    UserUpdateRequest,
)
from liftlog.schemas.workouts import (
    WorkoutCreateRequest,
    WorkoutDetailEnvelope,
    WorkoutEnvelope,
    WorkoutExerciseDetailsEnvelope,
    WorkoutExerciseDetailsRequest,
    WorkoutListEnvelope,
    WorkoutUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger("liftlog.domain")


def _ensure_owned(workouts: WorkoutRepository, workout_id: int, username: str) -> None:
    # A workout is only reachable under the user who owns it.
    if workouts.owner_of(workout_id) != username:
        raise NotFoundError(f"No workout: {workout_id}")


@router.get("", response_model=UserListEnvelope, dependencies=[Depends(require(ADMIN))])
def list_users(users: UserRepository = Depends(get_user_repo)):
    return UserListEnvelope(users=users.find_all())


@router.get(
    "/{username}",
    response_model=UserDetailEnvelope,
    response_model_exclude_unset=True,
    dependencies=[Depends(require(ADMIN_OR_USER))],
)
def get_user(
    username: str,
    users: UserRepository = Depends(get_user_repo),
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    user = users.get(username)
    detail = UserDetailResponse(**user.model_dump())
    user_workouts = workouts.get_all(username)
    if user_workouts:
        detail.workouts = user_workouts
    return UserDetailEnvelope(user=detail)


@router.post(
    "",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require(ADMIN))],
)
def create_user(
    payload: UserCreateRequest,
    request: Request,
    users: UserRepository = Depends(get_user_repo),
):
    user = users.register(payload.model_dump(), is_admin=payload.is_admin)
    logger.info(
        "domain_event event=user_created username=%s is_admin=%s request_id=%s",
        user.username,
        user.is_admin,
        getattr(request.state, "request_id", None),
    )
    return UserEnvelope(user=user)


@router.patch("/{username}", response_model=UserEnvelope, dependencies=[Depends(require(ADMIN_OR_USER))])
def update_user(
    username: str,
    payload: UserUpdateRequest,
    users: UserRepository = Depends(get_user_repo),
):
    return UserEnvelope(user=users.update(username, payload.changes()))


@router.delete("/{username}", response_model=DeletedResponse, dependencies=[Depends(require(ADMIN))])
def delete_user(
    username: str,
    request: Request,
    users: UserRepository = Depends(get_user_repo),
):
    users.remove(username)
    logger.info(
        "domain_event event=user_deleted username=%s request_id=%s",
        username,
        getattr(request.state, "request_id", None),
    )
    return DeletedResponse(deleted=username)


@router.get(
    "/{username}/workouts",
    response_model=WorkoutListEnvelope,
    dependencies=[Depends(require(ADMIN_OR_USER))],
)
def list_user_workouts(
    username: str,
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    return WorkoutListEnvelope(workouts=workouts.get_all(username))


@router.post(
    "/{username}/workouts",
    response_model=WorkoutEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require(ADMIN_OR_USER))],
)
def create_workout(
    username: str,
    payload: WorkoutCreateRequest,
    request: Request,
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    workout = workouts.create(username=username, exercises=payload.exercises, notes=payload.notes)
    logger.info(
        "domain_event event=workout_created username=%s workout_id=%s exercise_count=%s request_id=%s",
        username,
        workout.id,
        len(workout.exercises),
        getattr(request.state, "request_id", None),
    )
    return WorkoutEnvelope(workout=workout)


@router.get(
    "/{username}/workouts/{workout_id}",
    response_model=WorkoutDetailEnvelope,
    dependencies=[Depends(require(ADMIN_OR_USER))],
)
def get_workout(
    username: str,
    workout_id: IdPath,
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    _ensure_owned(workouts, workout_id, username)
    return WorkoutDetailEnvelope(workout=workouts.get(workout_id))


@router.patch(
    "/{username}/workouts/{workout_id}",
    response_model=WorkoutEnvelope,
    dependencies=[Depends(require(ADMIN_OR_USER))],
)
def update_workout(
    username: str,
    workout_id: IdPath,
    payload: WorkoutUpdateRequest,
    request: Request,
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    _ensure_owned(workouts, workout_id, username)
    workout = workouts.update(workout_id, exercises=payload.exercises, notes=payload.notes)
    logger.info(
        "domain_event event=workout_updated username=%s workout_id=%s exercise_count=%s request_id=%s",
        username,
        workout_id,
        len(workout.exercises),
        getattr(request.state, "request_id", None),
    )
    return WorkoutEnvelope(workout=workout)


@router.patch(
    "/{username}/workouts/{workout_id}/exercises",
    response_model=WorkoutExerciseDetailsEnvelope,
    dependencies=[Depends(require(ADMIN_OR_USER))],
)
def update_workout_exercise_details(
    username: str,
    workout_id: IdPath,
    payload: WorkoutExerciseDetailsRequest,
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    _ensure_owned(workouts, workout_id, username)
    details = [entry.model_dump() for entry in payload.exercises]
    return WorkoutExerciseDetailsEnvelope(workout=workouts.update_exercise_details(workout_id, details))


@router.delete(
    "/{username}/workouts/{workout_id}",
    response_model=DeletedResponse,
    dependencies=[Depends(require(ADMIN_OR_USER))],
)
def delete_workout(
    username: str,
    workout_id: IdPath,
    request: Request,
    workouts: WorkoutRepository = Depends(get_workout_repo),
):
    _ensure_owned(workouts, workout_id, username)
    workouts.delete(workout_id)
    logger.info(
        "domain_event event=workout_deleted username=%s workout_id=%s request_id=%s",
        username,
        workout_id,
        getattr(request.state, "request_id", None),
    )
    return DeletedResponse(deleted=workout_id)
