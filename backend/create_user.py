#!/usr/bin/env python
"""
Add an account to the credential file.

Useful when POST /api/admin/users is restricted or disabled.

Usage:
    python create_user.py --username alice --password '...' --name "Alice"
"""

import argparse
import getpass
import sys

from modules.auth.repository import CredentialStore
from shared.config import get_settings
from shared.exceptions import BeeleeError
from shared.storage import SnapshotFile


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Beelee user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    parser.add_argument("--name", help="Display name (defaults to the username)")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")

    settings = get_settings()
    store = CredentialStore(
        SnapshotFile(settings.users_path),
        bcrypt_rounds=settings.bcrypt_rounds,
        seed_defaults=settings.seed_default_users,
    )

    try:
        store.load()
        user = store.create(args.username, password, args.name)
    except BeeleeError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(f"Created user {user.id} ({user.name}) in {settings.users_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
