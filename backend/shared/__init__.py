"""
Shared infrastructure for Beelee backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- storage: JSON snapshot files
- repository: Base class for snapshot-backed stores
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import (
    BeeleeError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    StorageError,
    ConfigurationError,
)
from .models import AuthenticatedUser
from .repository import BaseRepository
from .storage import SnapshotFile

__all__ = [
    "Settings",
    "get_settings",
    "BeeleeError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "StorageError",
    "ConfigurationError",
    "AuthenticatedUser",
    "BaseRepository",
    "SnapshotFile",
]
