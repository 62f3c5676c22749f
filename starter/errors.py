"""Application errors and their HTTP rendering."""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class StartupError(Exception):
    """Raised when the application cannot be bootstrapped."""


class AppError(Exception):
    """
    Base exception for per-request failures.

    `error` is sent to the client as-is under the "error" key, so it must
    never carry internal detail.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: Any, status_code: int | None = None):
        super().__init__(error)
        self.error = error
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.error}


class ValidationFailedError(AppError):
    """Raised when the request body fails schema validation."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(errors)


class UserExistsError(AppError):
    """Raised when the email is already registered."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__("User already exists")


class InternalError(AppError):
    """Raised for server-side failures. The cause is logged, not returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )
