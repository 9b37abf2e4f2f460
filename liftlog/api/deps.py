from typing import Annotated

from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from liftlog.core.config import Settings
from liftlog.core.security import Identity, decode_token
from liftlog.db.session import get_db
from liftlog.repositories.exercises import ExerciseRepository
from liftlog.repositories.users import UserRepository
from liftlog.repositories.workouts import WorkoutRepository
from liftlog.schemas.common import MAX_DB_INT

bearer_scheme = HTTPBearer(auto_error=False)

# Integer row id taken from the URL.
IdPath = Annotated[int, Path(ge=1, le=MAX_DB_INT)]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pwd_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


def get_identity(
    request: Request,
    settings: Settings = Depends(get_settings),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity | None:
    """Identity carried by the bearer token, or None for anonymous callers.

    A missing, malformed or badly signed token is never an error here; the
    route's policy decides whether anonymous access is allowed.
    """
    identity = None
    if credentials is not None and credentials.scheme.lower() == "bearer":
        identity = decode_token(credentials.credentials, settings)

    request.state.username = identity.username if identity else None
    return identity


def get_exercise_repo(db: Session = Depends(get_db)) -> ExerciseRepository:
    return ExerciseRepository(db)


def get_user_repo(
    db: Session = Depends(get_db),
    pwd_context: CryptContext = Depends(get_pwd_context),
) -> UserRepository:
    return UserRepository(db, pwd_context)


def get_workout_repo(db: Session = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)
