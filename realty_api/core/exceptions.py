"""Custom exception classes for the application.

This module defines application-specific exceptions that map
to appropriate HTTP status codes and error responses.
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code to return.
            details: Additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class BadRequestException(AppException):
    """Raised when required input is missing or malformed."""

    def __init__(
        self,
        message: str = "All fields required!",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, status_code=400, details=details)


class NotFoundException(AppException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize not found exception.

        Args:
            message: Human-readable error message.
            details: Additional error context.
        """
        super().__init__(message=message, status_code=404, details=details)


class ConflictException(AppException):
    """Raised when a natural key is already taken."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, status_code=409, details=details)


class DatabaseException(AppException):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize database exception.

        Args:
            message: Human-readable error message.
            details: Additional error context.
        """
        super().__init__(message=message, status_code=500, details=details)


class ForbiddenException(AppException):
    """Raised when an action is not permitted on the resource."""

    def __init__(
        self,
        message: str = "Permission denied",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize forbidden exception.

        Args:
            message: Human-readable error message.
            details: Additional error context.
        """
        super().__init__(message=message, status_code=403, details=details)


class DependencyBlockedException(ForbiddenException):
    """Raised when a record cannot be deleted while children reference it."""


class MediaException(AppException):
    """Raised when a filesystem operation on uploaded media fails."""

    def __init__(
        self,
        message: str = "Media operation failed",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message=message, status_code=status_code, details=details)


class InvalidMediaException(MediaException):
    """Raised when an upload is not an acceptable image or PDF."""

    def __init__(
        self,
        message: str = "Only image files are allowed.",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details, status_code=400)
