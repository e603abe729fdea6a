"""Tests for the credential store."""

import json
import threading

import bcrypt
import pytest
from unittest.mock import patch

from modules.auth.repository import CredentialStore, DEFAULT_USERS, normalize_username
from modules.auth.exceptions import (
    InvalidPasswordError,
    MissingCredentialsError,
    UserExistsError,
)
from shared.exceptions import StorageError
from shared.storage import SnapshotFile


def make_store(path, seed_defaults=True) -> CredentialStore:
    store = CredentialStore(SnapshotFile(path), bcrypt_rounds=4, seed_defaults=seed_defaults)
    store.load()
    return store


class TestNormalizeUsername:
    def test_lowercases_and_strips(self):
        assert normalize_username("  Thomas ") == "thomas"

    def test_none_is_blank(self):
        assert normalize_username(None) == ""


class TestLoad:
    def test_first_run_seeds_default_accounts(self, data_dir):
        store = make_store(data_dir / "users.json")
        assert store.count() == len(DEFAULT_USERS)
        for username, password, name in DEFAULT_USERS:
            user = store.find(username)
            assert user is not None
            assert user.name == name
            assert store.verify(username, password) is True

    def test_first_run_persists_seed(self, data_dir):
        make_store(data_dir / "users.json")
        on_disk = json.loads((data_dir / "users.json").read_text())
        assert set(on_disk) == {u for u, _, _ in DEFAULT_USERS}
        assert set(on_disk["thomas"]) == {"id", "passwordHash", "name"}
        assert on_disk["thomas"]["passwordHash"].startswith("$2")

    def test_seeding_can_be_disabled(self, data_dir):
        store = make_store(data_dir / "users.json", seed_defaults=False)
        assert store.count() == 0
        assert json.loads((data_dir / "users.json").read_text()) == {}

    def test_loads_existing_file(self, data_dir):
        path = data_dir / "users.json"
        hashed = bcrypt.hashpw(b"pw123456", bcrypt.gensalt(rounds=4)).decode()
        path.write_text(json.dumps({"zoe": {"id": "zoe", "passwordHash": hashed, "name": "Zoe"}}))

        store = make_store(path)

        assert store.count() == 1
        assert store.find("ZOE").name == "Zoe"
        assert store.verify("zoe", "pw123456") is True

    def test_malformed_record_raises(self, data_dir):
        path = data_dir / "users.json"
        path.write_text(json.dumps({"zoe": {"id": "zoe"}}))
        with pytest.raises(StorageError):
            make_store(path)

    def test_reload_sees_created_users(self, data_dir):
        path = data_dir / "users.json"
        make_store(path).create("newbie", "secret99")
        assert make_store(path).verify("newbie", "secret99") is True


class TestCreate:
    def test_create_then_verify(self, credential_store):
        """A created user verifies with its password and not with another."""
        credential_store.create("alice", "wonderland")
        assert credential_store.verify("alice", "wonderland") is True
        assert credential_store.verify("alice", "wrong") is False

    def test_create_lowercases_id(self, credential_store):
        user = credential_store.create("Alice", "wonderland")
        assert user.id == "alice"
        assert credential_store.find("ALICE") == user

    def test_name_defaults_to_username(self, credential_store):
        user = credential_store.create("Alice", "wonderland")
        assert user.name == "Alice"

    def test_explicit_name(self, credential_store):
        user = credential_store.create("bob", "builder1", "Bob the Builder")
        assert user.name == "Bob the Builder"

    def test_password_is_hashed(self, credential_store):
        user = credential_store.create("carol", "plaintext")
        assert user.password_hash != "plaintext"
        assert bcrypt.checkpw(b"plaintext", user.password_hash.encode())

    def test_duplicate_username_conflicts(self, credential_store):
        with pytest.raises(UserExistsError):
            credential_store.create("Thomas", "anything")

    @pytest.mark.parametrize(
        "username,password",
        [("", "pw"), ("   ", "pw"), ("dave", ""), (None, "pw"), ("dave", None)],
    )
    def test_missing_fields_rejected(self, credential_store, username, password):
        with pytest.raises(MissingCredentialsError):
            credential_store.create(username, password)

    def test_overlong_password_rejected(self, credential_store):
        with pytest.raises(InvalidPasswordError):
            credential_store.create("erin", "x" * 73)

    def test_create_persists(self, credential_store, data_dir):
        credential_store.create("frank", "sinatra1")
        on_disk = json.loads((data_dir / "users.json").read_text())
        assert on_disk["frank"]["id"] == "frank"

    def test_lookups_are_not_blocked_while_hashing(self, credential_store):
        """A reader on another thread finishes while create() is still hashing."""
        found = []
        real_hash = credential_store._hash

        def hash_with_concurrent_lookup(password):
            reader = threading.Thread(target=lambda: found.append(credential_store.find("thomas")))
            reader.start()
            reader.join(timeout=5)
            found.append(reader.is_alive())
            return real_hash(password)

        with patch.object(credential_store, "_hash", side_effect=hash_with_concurrent_lookup):
            credential_store.create("harry", "potter12")

        assert found[0].id == "thomas"
        assert found[1] is False
        assert credential_store.verify("harry", "potter12") is True

    def test_failed_write_rolls_back(self, credential_store):
        with patch.object(SnapshotFile, "save", side_effect=StorageError("disk full", path="x")):
            with pytest.raises(StorageError):
                credential_store.create("ghost", "boo12345")
        assert credential_store.find("ghost") is None


class TestVerify:
    def test_unknown_user_is_false(self, credential_store):
        assert credential_store.verify("nobody", "shopping123") is False

    def test_unknown_user_still_checks_a_hash(self, credential_store):
        """Unknown users pay for a bcrypt check so timing matches."""
        with patch("modules.auth.repository.bcrypt.checkpw", return_value=False) as checkpw:
            credential_store.verify("nobody", "whatever")
        checkpw.assert_called_once()

    def test_username_is_case_insensitive(self, credential_store):
        assert credential_store.verify("THOMAS", "shopping123") is True

    def test_password_is_case_sensitive(self, credential_store):
        assert credential_store.verify("thomas", "SHOPPING123") is False

    def test_empty_password_is_false(self, credential_store):
        assert credential_store.verify("thomas", "") is False

    def test_authenticate_returns_user(self, credential_store):
        user = credential_store.authenticate("maria", "maria2024")
        assert user is not None
        assert user.id == "maria"
        assert credential_store.authenticate("maria", "nope") is None


class TestDefaultPasswords:
    def test_fresh_seed_uses_default_passwords(self, credential_store):
        assert credential_store.uses_default_passwords() is True

    def test_unseeded_store_has_no_default_passwords(self, data_dir):
        store = make_store(data_dir / "users.json", seed_defaults=False)
        store.create("owner", "a-strong-password")
        assert store.uses_default_passwords() is False


class TestListUsers:
    def test_list_users_returns_all(self, credential_store):
        ids = {user.id for user in credential_store.list_users()}
        assert ids == {"admin", "thomas", "maria", "family"}
