#!/usr/bin/env python3
from __future__ import annotations

import os
from getpass import getpass

from logingate.auth.credentials import UserCredentials, register
from logingate.auth.users import SqlUserStore
from logingate.config import DEFAULT_DATABASE_URL
from logingate.db import Database


def main() -> None:
    db = Database(os.getenv("LG_DATABASE_URL", DEFAULT_DATABASE_URL))
    db.create_all()
    store = SqlUserStore(db)

    username = input("Username: ").strip()
    email = input("Email: ").strip()

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")
    if len(username) < 3 or len(pw1) < 6:
        raise SystemExit("Username needs 3+ characters and password 6+")

    result = register(store, UserCredentials(username=username, email=email, password=pw1))
    if not result.ok:
        raise SystemExit(result.error.message)
    print(f"OK -> {result.user.username} ({result.user.id})")


if __name__ == "__main__":
    main()
