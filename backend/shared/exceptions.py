"""
Base exception classes for the Beelee backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status code.
"""

from typing import Optional, Any


class BeeleeError(Exception):
    """
    Base exception for all Beelee errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the ``{"error", "code"}`` API error body."""
        return {
            "error": self.message,
            "code": self.code,
        }


class ValidationError(BeeleeError):
    """Input validation failed."""

    pass


class ConflictError(BeeleeError):
    """Resource already exists."""

    pass


class AuthenticationError(BeeleeError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(BeeleeError):
    """Authorization failed (insufficient permissions)."""

    pass


class StorageError(BeeleeError):
    """Reading or writing a persisted snapshot failed."""

    def __init__(
        self,
        message: str,
        path: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code or "STORAGE_ERROR", details)
        self.path = path
        self.details["path"] = path


class ConfigurationError(BeeleeError):
    """The application is configured unsafely or incompletely."""

    pass
