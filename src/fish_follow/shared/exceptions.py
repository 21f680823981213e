"""
Custom exception classes for the application.
"""

from typing import Any


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


# Authentication errors
class AuthenticationError(AppError):
    """Base authentication error."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed", code: str = "AUTH_ERROR") -> None:
        super().__init__(message, code)


class InvalidTokenError(AuthenticationError):
    """Invalid or malformed token."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message, "INVALID_TOKEN")


class TokenExpiredError(AuthenticationError):
    """Token has expired."""

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message, "TOKEN_EXPIRED")


# Domain errors
class ValidationError(AppError):
    """Raised when business validation fails (distinct from pydantic ValidationError)."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class NotFoundError(AppError):
    """Resource not found."""

    status_code = 404

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, "NOT_FOUND")


class ConflictError(AppError):
    """Resource conflict."""

    status_code = 409

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, "CONFLICT")


class StorageError(AppError):
    """Database-layer failure, reported to callers without internals."""

    def __init__(self, message: str = "Operation failed") -> None:
        super().__init__(message, "STORAGE_ERROR")
