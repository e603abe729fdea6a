"""
Bearer token authentication.

Extracts the token from the Authorization header, verifies it through the
token service and hands the identity to the route. Rejections are raised as
module exceptions and turned into responses by the app's error handlers:
missing token -> 401, rejected token -> 403.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import ITokenService
from shared.models import AuthenticatedUser
from ..dependencies import get_token_service

# Bearer token extractor. Returns None for absent or non-Bearer headers.
bearer_scheme = HTTPBearer(auto_error=False)


def authenticate_credentials(
    credentials: Optional[HTTPAuthorizationCredentials],
    tokens: ITokenService,
) -> AuthenticatedUser:
    """
    Verify bearer credentials.

    Args:
        credentials: Parsed Authorization header, or None
        tokens: Token service to verify with

    Returns:
        AuthenticatedUser bound into the token

    Raises:
        MissingTokenError: If no bearer token was sent
        InvalidTokenError: If the token is malformed, forged or expired
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    identity = tokens.verify(credentials.credentials)
    return AuthenticatedUser(id=identity.user_id, username=identity.username)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: ITokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    return authenticate_credentials(credentials, tokens)
