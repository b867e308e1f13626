"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    NOT_FOUND = "NOT_FOUND"
    ACTIVITY_LOG_NOT_FOUND = "ACTIVITY_LOG_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    IMMUTABLE_LOG = "IMMUTABLE_LOG"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Malformed input or an illegal operation on an entity."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class InvalidIdError(ValidationError):
    """Identifier is not a well-formed UUID."""

    def __init__(self, value: str) -> None:
        super().__init__(
            message="Invalid UUID format",
            error_code=ErrorCode.INVALID_ID,
            details={"id": value},
        )


class ImmutableLogError(ValidationError):
    """Only manual log entries may be modified or deleted."""

    def __init__(self, log_id: str, log_type: str) -> None:
        super().__init__(
            message="Can only modify manual log entries",
            error_code=ErrorCode.IMMUTABLE_LOG,
            details={"id": log_id, "type": log_type},
        )


class NotFoundError(AppException):
    """Referenced entity does not exist."""

    def __init__(
        self,
        message: str = "Resource not found",
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ActivityLogNotFoundError(NotFoundError):
    """Activity log not found."""

    def __init__(self, log_id: str, message: str = "Activity log not found") -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.ACTIVITY_LOG_NOT_FOUND,
            details={"id": log_id},
        )
