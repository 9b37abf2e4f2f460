"""Application error types.

Repositories and policies raise these; the handlers registered in
``liftlog.main`` render every one of them as::

    {"error": {"message": ..., "status": ...}}

``message`` is usually a string, but validation failures carry a list with
one entry per violated constraint.
"""
from __future__ import annotations

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | list[str] | None = None, status_code: int | None = None):
        self.message = message if message is not None else self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"
