# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from logingate.db import Database, User
from logingate.errors import DuplicateUsernameError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserRecord:
    id: str
    username: str
    email: Optional[str]
    password_hash: str


class UserStore(Protocol):
    """Persistence the credential flows need. Implemented by `SqlUserStore`."""

    def find_user_by_username(self, username: str) -> Optional[UserRecord]: ...

    def find_user_by_id(self, user_id: str) -> Optional[UserRecord]: ...

    def create_user(self, *, username: str, email: Optional[str], password_hash: str) -> UserRecord: ...

    def update_password_hash(self, user_id: str, password_hash: str) -> None: ...


def _to_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
    )


class SqlUserStore:
    def __init__(self, db: Database):
        self.db = db

    def find_user_by_username(self, username: str) -> Optional[UserRecord]:
        u = (username or "").strip()
        if not u:
            return None
        with self.db.session() as s:
            row = s.scalar(select(User).where(User.username == u))
            return _to_record(row) if row else None

    def find_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        if not user_id:
            return None
        with self.db.session() as s:
            row = s.get(User, user_id)
            return _to_record(row) if row else None

    def create_user(self, *, username: str, email: Optional[str], password_hash: str) -> UserRecord:
        row = User(
            id=uuid.uuid4().hex,
            username=username.strip(),
            email=email or None,
            password_hash=password_hash,
        )
        try:
            with self.db.session() as s:
                s.add(row)
                s.flush()
                record = _to_record(row)
        except IntegrityError as e:
            logger.info("Duplicate username rejected by database: %s", row.username)
            raise DuplicateUsernameError(row.username) from e
        logger.info("Created user %s (%s)", record.username, record.id)
        return record

    def update_password_hash(self, user_id: str, password_hash: str) -> None:
        with self.db.session() as s:
            row = s.get(User, user_id)
            if row is not None:
                row.password_hash = password_hash
