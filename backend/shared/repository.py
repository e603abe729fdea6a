"""
Base repository class for snapshot-backed stores.

Provides a common abstraction layer for all repositories, encapsulating
the snapshot file and the lock that guards the in-memory mapping.
"""

import threading
from typing import TypeVar, Generic, Any

from .storage import SnapshotFile


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for snapshot persistence:
    - SnapshotFile access via self._file
    - The in-memory mapping via self._records (never returned to callers)
    - A re-entrant lock via self._lock for read-modify-persist cycles

    Subclasses implement domain-specific operations and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class SessionStore(BaseRepository[UserSession]):
            def clear_basket(self, user_id: str) -> None:
                with self._lock:
                    self._ensure(user_id)["basket"] = []
                    self._persist()
    """

    def __init__(self, file: SnapshotFile) -> None:
        """
        Initialize the repository with a snapshot file.

        Args:
            file: Snapshot file the repository loads from and persists to.
        """
        self._file = file
        self._records: dict[str, Any] = {}
        self._lock = threading.RLock()

    def count(self) -> int:
        """Number of records currently held."""
        with self._lock:
            return len(self._records)

    def _persist(self) -> None:
        """Write the whole mapping to disk. Callers must hold self._lock."""
        self._file.save(self._records)
