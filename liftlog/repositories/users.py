from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from passlib.context import CryptContext
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liftlog.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from liftlog.core.security import hash_password, verify_password
from liftlog.db.models.user import User
from liftlog.db.session import atomic
from liftlog.db.sql import sql_for_partial_update
from liftlog.schemas.users import UserResponse

USER_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "updatedAt": "updated_at",
}

# Same message for unknown user and bad password.
INVALID_CREDENTIALS = "Invalid username/password"


class UserRepository:
    def __init__(self, db: Session, pwd_context: CryptContext):
        self.db = db
        self.pwd_context = pwd_context

    def _get_row(self, username: str) -> User | None:
        return self.db.execute(select(User).where(User.username == username)).scalar_one_or_none()

    def authenticate(self, username: str, password: str) -> UserResponse:
        user = self._get_row(username)
        if user is None or not verify_password(self.pwd_context, password, user.password):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return UserResponse.model_validate(user)

    def register(self, fields: Mapping[str, Any], is_admin: bool = False) -> UserResponse:
        username = fields["username"]
        if self._get_row(username) is not None:
            raise BadRequestError(f"Duplicate username: {username}")

        user = User(
            username=username,
            password=hash_password(self.pwd_context, fields["password"]),
            first_name=fields["first_name"],
            last_name=fields["last_name"],
            email=fields["email"],
            is_admin=is_admin,
        )
        try:
            with atomic(self.db):
                self.db.add(user)
                self.db.flush()
        except IntegrityError:
            raise BadRequestError(f"Duplicate username: {username}") from None

        return UserResponse.model_validate(user)

    def find_all(self) -> list[UserResponse]:
        users = self.db.execute(select(User).order_by(User.username)).scalars().all()
        return [UserResponse.model_validate(user) for user in users]

    def get(self, username: str) -> UserResponse:
        user = self._get_row(username)
        if user is None:
            raise NotFoundError(f"No user: {username}")
        return UserResponse.model_validate(user)

    def update(self, username: str, data: Mapping[str, Any]) -> UserResponse:
        """Apply a partial update given in wire names.

        A new password is hashed before it is stored; ``updatedAt`` is stamped
        on every update.
        """
        if not data:
            raise BadRequestError("No data")

        changes = dict(data)
        if changes.get("password"):
            changes["password"] = hash_password(self.pwd_context, changes["password"])
        changes["updatedAt"] = datetime.now(timezone.utc)

        partial = sql_for_partial_update(changes, USER_COLUMNS)
        with atomic(self.db):
            result = self.db.execute(
                update(User).where(User.username == username).values(partial.assignments)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"No user: {username}")

        return self.get(username)

    def remove(self, username: str) -> None:
        with atomic(self.db):
            result = self.db.execute(delete(User).where(User.username == username))
            if result.rowcount == 0:
                raise NotFoundError(f"No user: {username}")
