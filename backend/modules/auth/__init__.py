"""
Authentication module.

Handles credential storage, bearer token issuance/verification,
and the login/verify/admin endpoints.

Public API:
- ITokenService: Interface for token operations
- ICredentialStore: Interface for account storage
- User, TokenIdentity, UserSummary: Data models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import ITokenService, ICredentialStore
from .models import User, TokenIdentity, UserSummary
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    MissingCredentialsError,
    InvalidPasswordError,
    UserExistsError,
    UserNotFoundError,
    AdminRequiredError,
    AdminCreationDisabledError,
)

__all__ = [
    # Interfaces
    "ITokenService",
    "ICredentialStore",
    # Models
    "User",
    "TokenIdentity",
    "UserSummary",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "MissingCredentialsError",
    "InvalidPasswordError",
    "UserExistsError",
    "UserNotFoundError",
    "AdminRequiredError",
    "AdminCreationDisabledError",
]
