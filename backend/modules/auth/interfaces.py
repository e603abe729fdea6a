"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. The Request Gate only knows ITokenService, so a
server-side session table could replace signed tokens without touching it.
"""

from datetime import timedelta
from typing import Protocol, Optional, runtime_checkable

from .models import TokenIdentity, User


@runtime_checkable
class ITokenService(Protocol):
    """
    Interface for bearer token operations.

    A token has two observable states: valid (signature ok, not expired)
    and invalid (anything else). There is no revocation.
    """

    def issue(
        self,
        user_id: str,
        username: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Issue a signed token for a user.

        Args:
            user_id: Stored user ID
            username: Username to bind into the token
            expires_delta: Lifetime override (defaults to the configured expiry)

        Returns:
            Encoded token string
        """
        ...

    def verify(self, token: str) -> TokenIdentity:
        """
        Verify a token and return the identity it binds.

        Raises:
            InvalidTokenError: If the token is malformed, forged or expired
        """
        ...


@runtime_checkable
class ICredentialStore(Protocol):
    """Interface for account storage and password checks."""

    def find(self, username: str) -> Optional[User]:
        """Look up a user by username (case-insensitive)."""
        ...

    def create(self, username: str, password: str, name: Optional[str] = None) -> User:
        """
        Create and persist a user.

        Raises:
            MissingCredentialsError: If username or password is blank
            UserExistsError: If the username is taken
        """
        ...

    def verify(self, username: str, password: str) -> bool:
        """Check a password. False for unknown users and wrong passwords alike."""
        ...

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user if the password matches, else None."""
        ...

    def count(self) -> int:
        """Number of stored users."""
        ...
