"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token fails verification for any reason."""

    def __init__(self, message: str = "Invalid or expired token", reason: str = "invalid"):
        super().__init__(message, code="INVALID_TOKEN", details={"reason": reason})


class ExpiredTokenError(InvalidTokenError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, reason="expired")


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Access denied. No token provided."):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised on login failure. Unknown user and wrong password look the same."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class UserNotFoundError(AuthenticationError):
    """Raised when the authenticated user doesn't exist in the credential store."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class MissingCredentialsError(ValidationError):
    """Raised when username or password is absent."""

    def __init__(self, message: str = "Username and password required"):
        super().__init__(message, code="MISSING_CREDENTIALS")


class InvalidPasswordError(ValidationError):
    """Raised when a password cannot be hashed (bcrypt accepts at most 72 bytes)."""

    def __init__(self, message: str = "Password must be at most 72 bytes"):
        super().__init__(message, code="INVALID_PASSWORD")


class UserExistsError(ConflictError):
    """Raised when creating a user whose username is taken."""

    def __init__(self, username: str):
        super().__init__(
            "User already exists",
            code="USER_EXISTS",
            details={"username": username},
        )


class AdminRequiredError(AuthorizationError):
    """Raised when a non-admin calls an admin-only endpoint."""

    def __init__(self, user_id: str):
        super().__init__(
            "Admin access required",
            code="ADMIN_REQUIRED",
            details={"user_id": user_id},
        )


class AdminCreationDisabledError(AuthorizationError):
    """Raised when user creation over HTTP is switched off."""

    def __init__(self):
        super().__init__(
            "User creation is disabled",
            code="ADMIN_CREATION_DISABLED",
        )
