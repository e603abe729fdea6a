"""
Token service implementation.

Issues and verifies HS256-signed bearer tokens with PyJWT.
Tokens are stateless: nothing is stored server-side.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from shared.exceptions import ConfigurationError

from .interfaces import ITokenService
from .models import TokenIdentity
from .exceptions import InvalidTokenError, ExpiredTokenError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_EXPIRY = timedelta(days=7)


class TokenService(ITokenService):
    """
    Implementation of the token service.

    Tokens carry ``userId``, ``username``, ``iat`` and ``exp`` claims.
    Any verification failure collapses to InvalidTokenError; expiry uses
    the ExpiredTokenError subclass so it can be logged separately.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiry: timedelta = DEFAULT_TOKEN_EXPIRY,
    ):
        if not secret:
            raise ConfigurationError(
                "Token signing secret is not configured",
                details={"setting": "jwt_secret"},
            )
        self._secret = secret
        self._algorithm = algorithm
        self._expiry = expiry

    def issue(
        self,
        user_id: str,
        username: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """Issue a signed token valid for ``expires_delta`` (default 7 days)."""
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "username": username,
            "iat": now,
            "exp": now + (expires_delta if expires_delta is not None else self._expiry),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenIdentity:
        """
        Verify a token's signature and expiry.

        Raises:
            ExpiredTokenError: Signature ok but past ``exp``
            InvalidTokenError: Anything else that is not a valid token
        """
        if not token:
            raise InvalidTokenError(reason="empty")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "userId", "username"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token: %s", e)
            raise InvalidTokenError(reason=type(e).__name__)

        user_id = payload["userId"]
        username = payload["username"]
        if not isinstance(user_id, str) or not isinstance(username, str) or not user_id:
            logger.info("Rejected token with malformed identity claims")
            raise InvalidTokenError(reason="claims")

        return TokenIdentity(user_id=user_id, username=username)
