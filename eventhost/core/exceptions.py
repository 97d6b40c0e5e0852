# eventhost/core/exceptions.py
"""
Application error taxonomy and the FastAPI handlers that render it.

Every error carries a category and an HTTP status so endpoints can raise
them directly; the email dispatcher catches them and turns them into a
structured send result instead.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCategory:
    """Error categories for structured error handling"""
    VALIDATION = "validation_error"
    RATE_LIMIT = "rate_limit_error"
    EXTERNAL_SERVICE = "external_service_error"
    CONFLICT = "conflict_error"
    CONFIGURATION = "configuration_error"


class AppError(Exception):
    """Base application error with structured information"""

    def __init__(
        self,
        message: str,
        category: str,
        status_code: int,
        details: Optional[dict] = None,
        retry_after: Optional[int] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        self.retry_after = retry_after
        super().__init__(self.message)


class ValidationError(AppError):
    """Input that fails a field rule. Never reaches the backend store."""
    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class InvalidRecipientError(ValidationError):
    def __init__(self, invalid: list[str]):
        self.invalid = invalid
        super().__init__(
            f"Invalid email addresses: {', '.join(invalid)}", field="to"
        )


class QuotaExceededError(AppError):
    """The host reached the send quota for the trailing window."""
    def __init__(self, retry_after: Optional[int] = None):
        super().__init__(
            message="Rate limit exceeded. Please try again later.",
            category=ErrorCategory.RATE_LIMIT,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            retry_after=retry_after,
        )


class EmailProviderNotConfigured(AppError):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class EmailTransportError(AppError):
    """The provider rejected the request or could not be reached."""
    def __init__(
        self, message: str, provider: str, status_code: Optional[int] = None
    ):
        self.provider = provider
        self.provider_status = status_code
        super().__init__(
            message=message,
            category=ErrorCategory.EXTERNAL_SERVICE,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={"provider": provider, "provider_status": status_code},
        )


class DuplicateRegistrationError(AppError):
    def __init__(self):
        super().__init__(
            message="You have already registered for this event with this email address.",
            category=ErrorCategory.CONFLICT,
            status_code=status.HTTP_409_CONFLICT,
        )


async def handle_app_error(request: Request, error: AppError) -> JSONResponse:
    """Render structured application errors."""
    log = logger.warning if error.status_code < 500 else logger.error
    log(
        f"{error.category} on {request.method} {request.url.path}: {error.message}"
    )

    headers = {}
    if error.retry_after:
        headers["Retry-After"] = str(error.retry_after)

    return JSONResponse(
        status_code=error.status_code,
        content={
            "detail": error.message,
            "category": error.category,
            **error.details,
        },
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
