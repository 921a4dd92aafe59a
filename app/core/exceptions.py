"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    ├── InvalidArgumentError - Malformed input, missing mode-required fields
    ├── PermissionDeniedError - Ownership failures (missing ids collapse here too)
    ├── NotFoundError - Entity absent
    ├── ConflictError - Stale optimistic-concurrency precondition
    ├── ResourceExhaustedError - Batch or image-count ceiling exceeded
    └── InternalError - Storage or metadata backend failure

Usage:
    from core.exceptions import InvalidArgumentError, ResourceExhaustedError

    # Raise with message only
    raise InvalidArgumentError("description is required")

    # Raise with error code for client handling
    raise InvalidArgumentError("Unsupported image type", error_code="UNSUPPORTED_MIME_TYPE")

    # Limit errors always report both limit and actual value
    raise ResourceExhaustedError("Too many images", limit=10, actual=12)

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.http_status)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (authentication, parsing, etc.).
    core.exception_handler renders these into HTTP responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Provides a consistent interface for error handling across the application.
    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, limits, etc.)
        http_status: HTTP status used when rendered by the API layer

    Example:
        try:
            record = RecordService.get(record_id)
        except NotFoundError as e:
            logger.warning(f"Record not found: {e.error_code}")
            return Response(e.to_dict(), status=e.http_status)
    """

    default_error_code: str = "INTERNAL"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Too many images",
                "error_code": "RESOURCE_EXHAUSTED",
                "details": {"limit": 10, "actual": 12}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class InvalidArgumentError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Malformed or missing request fields
    - Disallowed MIME types
    - Record-mode media without a geocoordinate
    - Referencing an EXISTING media id that is not bound to the entity

    Example:
        raise InvalidArgumentError(
            "Every record image needs a valid location",
            details={"index": 1},
        )
    """

    default_error_code: str = "INVALID_ARGUMENT"
    http_status: int = 400


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when the caller does not own the resource it is acting on.

    Missing media ids are reported with this error as well, so callers
    cannot probe which ids exist.

    Example:
        if record.user_id != user.id:
            raise PermissionDeniedError("You cannot modify this record")
    """

    default_error_code: str = "PERMISSION_DENIED"
    http_status: int = 403


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested content entity is not found.

    Example:
        record = Record.objects.filter(id=record_id).first()
        if not record:
            raise NotFoundError(
                "Record not found",
                details={"record_id": str(record_id)},
            )
    """

    default_error_code: str = "NOT_FOUND"
    http_status: int = 404


class ConflictError(BaseApplicationError):
    """
    Raised when an update was computed against a stale entity.

    Example:
        if entity.updated_at != expected_updated_at:
            raise ConflictError(
                "Entity was modified by another request",
                details={"updated_at": entity.updated_at.isoformat()},
            )

    Note:
        HTTP 409 Conflict is the appropriate status for these errors.
    """

    default_error_code: str = "CONFLICT"
    http_status: int = 409


class ResourceExhaustedError(BaseApplicationError):
    """
    Raised when a count or size ceiling is exceeded.

    The limit and the actual value are always part of ``details`` so
    clients can correct the request without guessing.

    Example:
        if len(images) > 10:
            raise ResourceExhaustedError(
                "A record holds at most 10 images",
                limit=10,
                actual=len(images),
            )
    """

    default_error_code: str = "RESOURCE_EXHAUSTED"
    http_status: int = 429

    def __init__(
        self,
        message: str,
        limit: int,
        actual: int,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        merged = {"limit": limit, "actual": actual}
        if details:
            merged.update(details)
        self.limit = limit
        self.actual = actual
        super().__init__(message, error_code=error_code, details=merged)


class InternalError(BaseApplicationError):
    """
    Raised when the metadata store or object storage fails.

    Example:
        try:
            MediaObject.objects.bulk_create(rows)
        except DatabaseError as e:
            raise InternalError("Failed to create upload records") from e

    Note:
        Log the original error for debugging but don't expose
        internal details to clients.
    """

    default_error_code: str = "INTERNAL"
    http_status: int = 500
