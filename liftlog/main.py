import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session, sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from liftlog.api.routes.auth import router as auth_router
from liftlog.api.routes.exercises import router as exercises_router
from liftlog.api.routes.users import router as users_router
from liftlog.api.routes.workouts import router as workouts_router
from liftlog.core.config import Settings, get_settings
from liftlog.core.errors import AppError
from liftlog.core.security import make_password_context
from liftlog.db.models import create_schema
from liftlog.db.session import get_db, make_engine, make_session_factory
from liftlog.middleware.request_logging import RequestLoggingMiddleware

logger = logging.getLogger("liftlog.app")


def _error_response(message, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"error": {"message": message, "status": status_code}},
        status_code=status_code,
    )


def _validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" segment.
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(_request: Request, exc: AppError):
        return _error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError):
        return _error_response(_validation_messages(exc), 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException):
        return _error_response(exc.detail, exc.status_code)


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    if session_factory is None:
        engine = make_engine(settings.database_url)
        if settings.auto_create_schema:
            create_schema(engine)
        session_factory = make_session_factory(engine)

    app = FastAPI(title="Liftlog Fitness API")
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.pwd_context = make_password_context(settings.bcrypt_work_factor)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(exercises_router)
    app.include_router(users_router)
    app.include_router(workouts_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/health/db")
    def health_db(db: Session = Depends(get_db)):
        db.execute(text("SELECT 1"))
        return {"db": "ok"}

    logger.info("app_configured environment=%s", settings.environment)
    return app


def _configure_logging() -> None:
    logging.basicConfig(level=get_settings().log_level)


_configure_logging()
app = create_app()
