"""
Credential store.

Holds username -> {id, passwordHash, name} in memory and persists the whole
mapping to a JSON snapshot after every mutation. Passwords are hashed with
bcrypt.
"""

import logging
from typing import Optional

import bcrypt
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import StorageError
from shared.repository import BaseRepository
from shared.storage import SnapshotFile

from .interfaces import ICredentialStore
from .models import User
from .exceptions import (
    InvalidPasswordError,
    MissingCredentialsError,
    UserExistsError,
)

logger = logging.getLogger(__name__)

# First-run demo accounts (username, password, display name).
# Production startup refuses to run while any of these passwords still work.
DEFAULT_USERS: tuple[tuple[str, str, str], ...] = (
    ("admin", "beelee2024", "Admin User"),
    ("thomas", "shopping123", "Thomas"),
    ("maria", "maria2024", "Maria"),
    ("family", "family2024", "Family Account"),
)

BCRYPT_MAX_PASSWORD_BYTES = 72


def normalize_username(username: Optional[str]) -> str:
    return (username or "").strip().lower()


class CredentialStore(BaseRepository[User], ICredentialStore):
    """
    Snapshot-backed user store.

    Call load() once before use. Records are keyed by lowercase username,
    which is also the user ID.
    """

    def __init__(
        self,
        file: SnapshotFile,
        bcrypt_rounds: int = 10,
        seed_defaults: bool = True,
    ) -> None:
        super().__init__(file)
        self._rounds = bcrypt_rounds
        self._seed_defaults = seed_defaults
        self._dummy_hash: Optional[bytes] = None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """
        Load users from disk, seeding the default accounts on first run.

        Raises:
            StorageError: If the file is unreadable or holds malformed records
        """
        with self._lock:
            data = self._file.load()
            if data is None:
                self._records = {}
                if self._seed_defaults:
                    for username, password, name in DEFAULT_USERS:
                        self._records[username] = self._new_record(username, password, name)
                    logger.warning(
                        "Seeded %d default accounts with well-known passwords into %s",
                        len(DEFAULT_USERS),
                        self._file.path,
                    )
                self._persist()
                return

            for key, raw in data.items():
                try:
                    User.model_validate(raw)
                except PydanticValidationError as e:
                    raise StorageError(
                        f"Malformed user record '{key}' in {self._file.path}",
                        path=str(self._file.path),
                    ) from e
            self._records = data
            logger.info("Loaded %d users from %s", len(data), self._file.path)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def find(self, username: str) -> Optional[User]:
        key = normalize_username(username)
        if not key:
            return None
        with self._lock:
            raw = self._records.get(key)
            return User.model_validate(raw) if raw is not None else None

    def list_users(self) -> list[User]:
        with self._lock:
            return [User.model_validate(raw) for raw in self._records.values()]

    def verify(self, username: str, password: str) -> bool:
        """
        Check a plaintext password against the stored bcrypt hash.

        Unknown users still pay for one bcrypt check so response timing
        does not reveal which usernames exist.
        """
        return self.authenticate(username, password) is not None

    def authenticate(self, username: str, password: str) -> Optional[User]:
        if not password:
            return None
        secret = password.encode("utf-8")
        if len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
            return None

        user = self.find(username)
        if user is None:
            bcrypt.checkpw(secret, self._get_dummy_hash())
            return None

        if bcrypt.checkpw(secret, user.password_hash.encode("utf-8")):
            return user
        return None

    def uses_default_passwords(self) -> bool:
        """True if any seeded account still accepts its well-known password."""
        return any(
            self.verify(username, password) for username, password, _ in DEFAULT_USERS
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, username: str, password: str, name: Optional[str] = None) -> User:
        """
        Create a user with a bcrypt-hashed password and persist the store.

        Raises:
            MissingCredentialsError: If username or password is blank
            InvalidPasswordError: If the password exceeds bcrypt's input limit
            UserExistsError: If the lowercased username already exists
            StorageError: If the snapshot cannot be written
        """
        key = normalize_username(username)
        if not key or not password:
            raise MissingCredentialsError()
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise InvalidPasswordError()

        # Hash outside the lock so lookups are not held up by bcrypt
        record = self._new_record(key, password, name or username)

        with self._lock:
            if key in self._records:
                raise UserExistsError(key)

            self._records[key] = record
            try:
                self._persist()
            except StorageError:
                del self._records[key]
                raise

            logger.info("Created user %s", key)
            return User.model_validate(self._records[key])

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _hash(self, password: str) -> str:
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)
        ).decode("utf-8")

    def _new_record(self, user_id: str, password: str, name: str) -> dict[str, str]:
        user = User(id=user_id, password_hash=self._hash(password), name=name)
        return user.model_dump(by_alias=True)

    def _get_dummy_hash(self) -> bytes:
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy", bcrypt.gensalt(rounds=self._rounds))
        return self._dummy_hash
