"""Domain errors and their translation into HTTP responses.

Every outcome a caller can recover from is a ``TodoError`` subclass that
carries its own status code and client-facing detail. The detail strings
are deliberately uninformative for credential, token and ownership
failures so that responses cannot be used to enumerate usernames or
probe for other users' tasks.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TodoError(Exception):
    status_code = 400
    detail = "Bad request"
    headers: Optional[dict] = None

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    def to_response(self) -> dict:
        return {"detail": self.detail}


class DuplicateUsername(TodoError):
    status_code = 400
    detail = "Username already exists"


class InvalidCredentials(TodoError):
    status_code = 401
    detail = "Invalid username or password"


class InvalidToken(TodoError):
    status_code = 401
    detail = "Invalid token"
    headers = {"WWW-Authenticate": "Bearer"}


class Unidentified(TodoError):
    status_code = 401
    detail = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class NotFound(TodoError):
    status_code = 404
    detail = "Task not found"


class ValidationError(TodoError):
    """Input violated one or more field constraints; ``errors`` lists all of them."""

    status_code = 400
    detail = "Validation failed"

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__()

    def to_response(self) -> dict:
        return {"detail": self.detail, "errors": self.errors}


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain handler and the catch-all 500 handler on ``app``."""

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError):
        logger.debug("%s on %s %s", type(exc).__name__, request.method, request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response(),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
