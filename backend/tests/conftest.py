"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Every test runs against a fresh temporary data directory and fresh settings.
"""

import pytest
from datetime import datetime, timezone, timedelta
from pathlib import Path
import jwt  # PyJWT
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import reset_container
from modules.auth.repository import CredentialStore
from modules.sessions.repository import SessionStore
from shared.config import get_settings
from shared.storage import SnapshotFile


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

# Environment variables read by Settings that tests must control
SETTINGS_ENV_VARS = (
    "ENVIRONMENT",
    "DEBUG",
    "PORT",
    "JWT_SECRET",
    "TOKEN_EXPIRY_DAYS",
    "DATA_DIR",
    "USERS_FILE",
    "SESSIONS_FILE",
    "BCRYPT_ROUNDS",
    "SEED_DEFAULT_USERS",
    "ADMIN_USER_CREATION",
    "ADMIN_USERNAMES",
)


def create_test_token(
    user_id: str = "thomas",
    username: str = "thomas",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test token the way the token service signs them.

    Args:
        user_id: User ID claim
        username: Username claim
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(days=7)

    payload = {
        "userId": user_id,
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory holding users.json and sessions.json for one test."""
    return tmp_path


@pytest.fixture(autouse=True)
def test_settings_env(monkeypatch, data_dir: Path):
    """Point settings at the temporary data dir and reset cached services."""
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DATA_DIR", str(data_dir))
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")

    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def client():
    """Test client with the app's lifespan (store loading) applied."""
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def credential_store(data_dir: Path) -> CredentialStore:
    """Loaded credential store seeded with the default accounts."""
    store = CredentialStore(SnapshotFile(data_dir / "users.json"), bcrypt_rounds=4)
    store.load()
    return store


@pytest.fixture
def session_store(data_dir: Path) -> SessionStore:
    """Loaded, empty session store."""
    store = SessionStore(SnapshotFile(data_dir / "sessions.json"))
    store.load()
    return store


@pytest.fixture
def auth_token() -> str:
    """A valid token for the seeded ``thomas`` account."""
    return create_test_token()


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
