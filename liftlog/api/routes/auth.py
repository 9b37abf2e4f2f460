import logging

from fastapi import APIRouter, Depends, Request, status

from liftlog.api.deps import get_settings, get_user_repo
from liftlog.core.config import Settings
from liftlog.core.errors import AppError
from liftlog.core.security import Identity, create_token
from liftlog.repositories.users import UserRepository
from liftlog.schemas.auth import LoginRequest, RegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("liftlog.domain")


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    request: Request,
    users: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    try:
        user = users.authenticate(payload.username, payload.password)
    except AppError:
        logger.info(
            "domain_event event=login_failed reason=invalid_credentials request_id=%s",
            getattr(request.state, "request_id", None),
        )
        raise

    logger.info(
        "domain_event event=login_success username=%s request_id=%s",
        user.username,
        getattr(request.state, "request_id", None),
    )
    token = create_token(Identity(username=user.username, is_admin=user.is_admin), settings)
    return TokenResponse(token=token)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    request: Request,
    users: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    try:
        user = users.register(payload.model_dump())
    except AppError:
        logger.info(
            "domain_event event=signup_failed reason=username_conflict request_id=%s",
            getattr(request.state, "request_id", None),
        )
        raise

    logger.info(
        "domain_event event=signup_success username=%s request_id=%s",
        user.username,
        getattr(request.state, "request_id", None),
    )
    token = create_token(Identity(username=user.username, is_admin=user.is_admin), settings)
    return TokenResponse(token=token)
