"""
Centralized configuration for the Beelee backend.

All settings are loaded from environment variables with sensible defaults.
Production deployments must provide JWT_SECRET; see validate_for_startup().
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


# Known placeholder secrets that must never sign production tokens
PLACEHOLDER_SECRETS = frozenset({
    "your-super-secret-key-change-this-in-production",
    "change-me",
    "secret",
})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Beelee API"
    app_version: str = "0.1.0"
    environment: Literal["development", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_expiry_days: int = 7

    # Persistence
    data_dir: str = "."
    users_file: str = "users.json"
    sessions_file: str = "sessions.json"

    # Credentials
    bcrypt_rounds: int = 10
    seed_default_users: bool = True

    # Admin user creation: open, admin, disabled (unset picks per environment)
    admin_user_creation: Optional[Literal["open", "admin", "disabled"]] = None
    admin_usernames: list[str] = ["admin"]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def users_path(self) -> Path:
        return Path(self.data_dir) / self.users_file

    @property
    def sessions_path(self) -> Path:
        return Path(self.data_dir) / self.sessions_file

    @property
    def admin_create_mode(self) -> str:
        """Effective admin-create guard. Production defaults to admin-only."""
        if self.admin_user_creation is not None:
            return self.admin_user_creation
        return "admin" if self.is_production else "open"

    def validate_for_startup(self) -> None:
        """
        Refuse to start with an unsafe production configuration.

        Raises:
            ConfigurationError: If the signing secret is unset or a known placeholder
        """
        if not self.is_production:
            return

        secret = self.jwt_secret.strip()
        if not secret:
            raise ConfigurationError(
                "JWT_SECRET must be set when ENVIRONMENT=production",
                details={"setting": "jwt_secret"},
            )
        if secret.lower() in PLACEHOLDER_SECRETS:
            raise ConfigurationError(
                "JWT_SECRET is a placeholder value",
                details={"setting": "jwt_secret"},
            )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
