"""
Domain errors raised by repositories, the request workflow and the auth
component, plus the FastAPI handlers that serialize them.

Every error renders as ``{"message": ..., "error": ...}`` with its own status
code; ``error`` is omitted when there is nothing beyond the message.
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bloodbank.utils.logging_config import get_logger

logger = get_logger(__name__)


class BloodBankError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        error: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.default_message
        self.error = error
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class NotFoundError(BloodBankError):
    """Zero rows matched a targeted lookup, update or delete."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Data not found."


class ConflictError(BloodBankError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflicting data"


class InvalidCredentialsError(BloodBankError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid email or password"


class AuthenticationError(BloodBankError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid authentication credentials"


class StoreError(BloodBankError):
    """Any database failure. ``error`` carries the driver message verbatim."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Database operation failed"


class PartialTransitionError(BloodBankError):
    """Archiving a resolved request failed after its update was applied."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to archive resolved request"


async def bloodbank_error_handler(request: Request, exc: BloodBankError):
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "extra_fields": {
                "http_method": request.method,
                "path": str(request.url.path),
                "status_code": exc.status_code,
                "error": exc.error,
            }
        },
    )

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BloodBankError, bloodbank_error_handler)
