"""Application exception types."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Literal

from pydantic import BaseModel

from course_api.repositories.base import StorageError
from course_api.schemas.error import MessageResponse, OwnershipErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

AuthFailureReason = Literal["missing_header", "malformed_header", "principal_not_found", "secret_mismatch"]

ACCESS_DENIED_MESSAGE = "Access Denied"
OWNERSHIP_VIOLATION_MESSAGE = "The course you are attempting to modify is owned by a different user"
COURSE_NOT_FOUND_MESSAGE = "Course not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApiError(Exception):
    """Structured API error that maps directly to a response payload."""

    def __init__(self, status_code: int, payload: BaseModel) -> None:
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"{status_code}: {payload.model_dump_json()}")


class AuthenticationFailed(ApiError):
    """Rejected credentials; the reason is kept for server-side logging only."""

    def __init__(self, reason: AuthFailureReason, detail: str) -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(401, MessageResponse(message=ACCESS_DENIED_MESSAGE))


class ValidationFailed(ApiError):
    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(400, ValidationErrorResponse(errors=self.errors))


class DuplicateEmail(ApiError):
    def __init__(self, email_address: str) -> None:
        self.email_address = email_address
        super().__init__(
            400,
            ValidationErrorResponse(errors=[f'The email address "{email_address}" is already in use']),
        )


class OwnershipViolation(ApiError):
    def __init__(self) -> None:
        super().__init__(403, OwnershipErrorResponse(error=OWNERSHIP_VIOLATION_MESSAGE))


class ResourceNotFound(ApiError):
    def __init__(self, message: str = COURSE_NOT_FOUND_MESSAGE) -> None:
        super().__init__(404, MessageResponse(message=message))


class StorageFailure(ApiError):
    def __init__(self) -> None:
        super().__init__(500, MessageResponse(message=INTERNAL_ERROR_MESSAGE))


@contextmanager
def storage_guard(operation: str) -> Iterator[None]:
    """Translate unexpected persistence errors into a generic 500."""
    try:
        yield
    except StorageError as exc:
        logger.exception(
            "storage.failed operation=%s error_type=%s error=%s",
            operation,
            type(exc).__name__,
            exc,
        )
        raise StorageFailure() from exc


__all__ = [
    "ACCESS_DENIED_MESSAGE",
    "ApiError",
    "AuthFailureReason",
    "AuthenticationFailed",
    "COURSE_NOT_FOUND_MESSAGE",
    "DuplicateEmail",
    "INTERNAL_ERROR_MESSAGE",
    "OWNERSHIP_VIOLATION_MESSAGE",
    "OwnershipViolation",
    "ResourceNotFound",
    "StorageFailure",
    "ValidationFailed",
    "storage_guard",
]
