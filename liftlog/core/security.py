from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from liftlog.core.config import Settings


@dataclass(frozen=True)
class Identity:
    username: str
    is_admin: bool = False


def make_password_context(work_factor: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=work_factor)


def hash_password(pwd_context: CryptContext, password: str) -> str:
    return pwd_context.hash(password)


def verify_password(pwd_context: CryptContext, plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def create_token(identity: Identity, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "username": identity.username,
        "isAdmin": identity.is_admin,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Identity | None:
    """Recover the identity from a token, or None if it does not verify."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        return None
    return Identity(username=username, is_admin=payload.get("isAdmin") is True)
