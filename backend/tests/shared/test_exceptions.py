"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    BeeleeError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    StorageError,
    ConfigurationError,
)


class TestBeeleeError:
    def test_beelee_error_message(self):
        """BeeleeError should store message."""
        error = BeeleeError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_beelee_error_default_code(self):
        """BeeleeError should default code to class name."""
        error = BeeleeError("Test error")
        assert error.code == "BeeleeError"

    def test_beelee_error_custom_code(self):
        """BeeleeError should accept custom code."""
        error = BeeleeError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_beelee_error_default_details(self):
        """BeeleeError should default details to empty dict."""
        error = BeeleeError("Test error")
        assert error.details == {}

    def test_beelee_error_to_dict(self):
        """BeeleeError should convert to the API error body, without details."""
        error = BeeleeError("Test error", code="TEST_ERROR", details={"key": "value"})

        assert error.to_dict() == {"error": "Test error", "code": "TEST_ERROR"}


class TestSubclasses:
    @pytest.mark.parametrize(
        "cls",
        [ValidationError, ConflictError, AuthenticationError, AuthorizationError, ConfigurationError],
    )
    def test_inherits_beelee_error(self, cls):
        error = cls("Something failed")
        assert isinstance(error, BeeleeError)
        assert error.code == cls.__name__


class TestStorageError:
    def test_storage_error_records_path(self):
        """StorageError should carry the file path in details."""
        error = StorageError("Could not write", path="/tmp/users.json")
        assert error.path == "/tmp/users.json"
        assert error.details["path"] == "/tmp/users.json"
        assert error.code == "STORAGE_ERROR"

    def test_storage_error_custom_code(self):
        error = StorageError("Bad JSON", path="x.json", code="CORRUPT")
        assert error.code == "CORRUPT"
