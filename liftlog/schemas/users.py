from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field

from liftlog.schemas.auth import RegisterRequest
from liftlog.schemas.common import CamelModel, PatchModel
from liftlog.schemas.workouts import WorkoutResponse


class UserCreateRequest(RegisterRequest):
    is_admin: bool = False


class UserUpdateRequest(PatchModel):
    password: str | None = Field(default=None, min_length=5, max_length=72)
    first_name: str | None = Field(default=None, min_length=1, max_length=30)
    last_name: str | None = Field(default=None, min_length=1, max_length=30)
    email: EmailStr | None = None


class UserResponse(CamelModel):
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserDetailResponse(UserResponse):
    # Only present when the user has logged workouts.
    workouts: list[WorkoutResponse] | None = None


class UserEnvelope(CamelModel):
    user: UserResponse


class UserDetailEnvelope(CamelModel):
    user: UserDetailResponse


class UserListEnvelope(CamelModel):
    users: list[UserResponse] = Field(default_factory=list)
