# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bootstrap accounts from a YAML file.

Format::

    users:
      alice:
        email: alice@example.com
        password_hash: "$argon2id$..."
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import yaml

from logingate.auth.users import UserStore
from logingate.errors import DuplicateUsernameError

logger = logging.getLogger(__name__)


def load_users_file(path: Path) -> List[Dict[str, str]]:
    if not path.exists():
        return []
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    users = (raw.get("users") or {}) if isinstance(raw, dict) else {}
    out: List[Dict[str, str]] = []
    for uname, udata in users.items():
        if not isinstance(udata, dict):
            continue
        username = str(uname).strip()
        ph = str(udata.get("password_hash") or "").strip()
        if not username or not ph:
            continue
        email = str(udata.get("email") or "").strip()
        out.append({"username": username, "email": email, "password_hash": ph})
    return out


def seed_users(store: UserStore, path: Path) -> int:
    """Create the accounts listed in `path` that don't exist yet. Returns how many were created."""
    created = 0
    for entry in load_users_file(path):
        if store.find_user_by_username(entry["username"]):
            continue
        try:
            store.create_user(
                username=entry["username"],
                email=entry["email"] or None,
                password_hash=entry["password_hash"],
            )
        except DuplicateUsernameError:
            continue
        created += 1
    if created:
        logger.info("Seeded %d user(s) from %s", created, path)
    return created
