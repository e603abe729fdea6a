"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

To swap signed tokens for a server-side session table, only the
`tokens` property here needs to change.
"""

import logging
import secrets
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ITokenService
    from modules.auth.repository import CredentialStore
    from modules.sessions.repository import SessionStore

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access; stores
    are loaded from disk when they are created.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._credential_store: "CredentialStore | None" = None
        self._session_store: "SessionStore | None" = None
        self._token_service: "ITokenService | None" = None

    @property
    def settings(self) -> Settings:
        """Get the settings this container was built from."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def credentials(self) -> "CredentialStore":
        """Get the credential store, loading it on first access."""
        if self._credential_store is None:
            from modules.auth.repository import CredentialStore
            from shared.storage import SnapshotFile
            store = CredentialStore(
                SnapshotFile(self.settings.users_path),
                bcrypt_rounds=self.settings.bcrypt_rounds,
                seed_defaults=self.settings.seed_default_users,
            )
            store.load()
            self._credential_store = store
        return self._credential_store

    @property
    def sessions(self) -> "SessionStore":
        """Get the session store, loading it on first access."""
        if self._session_store is None:
            from modules.sessions.repository import SessionStore
            from shared.storage import SnapshotFile
            store = SessionStore(SnapshotFile(self.settings.sessions_path))
            store.load()
            self._session_store = store
        return self._session_store

    @property
    def tokens(self) -> "ITokenService":
        """Get the token service instance."""
        if self._token_service is None:
            from modules.auth.service import TokenService
            secret = self.settings.jwt_secret
            if not secret and not self.settings.is_production:
                secret = secrets.token_urlsafe(32)
                logger.warning(
                    "JWT_SECRET is not set; using a random secret. "
                    "Tokens will not survive a restart."
                )
            self._token_service = TokenService(
                secret,
                algorithm=self.settings.jwt_algorithm,
                expiry=timedelta(days=self.settings.token_expiry_days),
            )
        return self._token_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different settings.
        """
        self._settings = None
        self._credential_store = None
        self._session_store = None
        self._token_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings() -> Settings:
    """FastAPI dependency for settings."""
    return get_container().settings


def get_credential_store() -> "CredentialStore":
    """FastAPI dependency for the credential store."""
    return get_container().credentials


def get_session_store() -> "SessionStore":
    """FastAPI dependency for the session store."""
    return get_container().sessions


def get_token_service() -> "ITokenService":
    """FastAPI dependency for the token service."""
    return get_container().tokens
