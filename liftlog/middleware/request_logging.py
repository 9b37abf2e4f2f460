from __future__ import annotations

import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger("liftlog.request")


def _quiet(request: Request) -> bool:
    app = request.scope.get("app")
    settings = getattr(getattr(app, "state", None), "settings", None)
    return getattr(settings, "environment", None) == "test"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            if not _quiet(request):
                logger.exception(
                    "request_failed request_id=%s method=%s path=%s",
                    request_id,
                    request.method,
                    request.url.path,
                )
            response = JSONResponse(
                {"error": {"message": "Internal Server Error", "status": 500}},
                status_code=500,
            )

        response.headers["X-Request-ID"] = request_id
        duration_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "request_complete request_id=%s method=%s path=%s status_code=%s duration_ms=%.2f username=%s",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            getattr(request.state, "username", None),
        )
        return response
