"""
JSON snapshot files.

Each store persists its whole state as one pretty-printed JSON document,
rewritten on every mutation. Writes go through a temporary file in the same
directory and are moved into place, so readers never see a half-written file.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from .exceptions import StorageError

logger = logging.getLogger(__name__)


class SnapshotFile:
    """A JSON document on disk that is always read and written whole."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Optional[dict[str, Any]]:
        """
        Read the snapshot.

        Returns:
            The decoded JSON object, or None if the file does not exist

        Raises:
            StorageError: If the file cannot be read or is not a JSON object
        """
        if not self._path.exists():
            return None

        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Snapshot is not valid JSON: {self._path}", path=str(self._path)
            ) from e
        except OSError as e:
            raise StorageError(
                f"Could not read snapshot: {self._path}", path=str(self._path)
            ) from e

        if not isinstance(data, dict):
            raise StorageError(
                f"Snapshot must contain a JSON object: {self._path}",
                path=str(self._path),
            )
        return data

    def save(self, data: dict[str, Any]) -> None:
        """
        Replace the snapshot with ``data``.

        Raises:
            StorageError: If serialization or the write fails
        """
        directory = self._path.parent
        tmp_name: Optional[str] = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(
                f"Could not write snapshot: {self._path}", path=str(self._path)
            ) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.debug("Wrote snapshot %s (%d records)", self._path, len(data))
