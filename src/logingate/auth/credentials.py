# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Login / register / logout flows.

`login` and `register` never raise for bad credentials: they return an
`AuthResult` the caller has to branch on. Store failures (`StoreError`) do
propagate.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from logingate.auth.passwords import hash_password, needs_rehash, verify_password
from logingate.auth.session import SessionStore
from logingate.auth.users import UserRecord, UserStore
from logingate.errors import DuplicateUsernameError

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

EMAIL_WRONG = "Email is wrong!"
USER_NOT_FOUND = "User not found!"
PASSWORD_WRONG = "Password is wrong!"


def user_exists_message(username: str) -> str:
    return f"User with username {username} already exists"


@dataclass(frozen=True)
class UserCredentials:
    username: str
    email: Optional[str]
    password: str


@dataclass(frozen=True)
class AuthError:
    message: str


@dataclass(frozen=True)
class AuthResult:
    ok: bool
    user: Optional[UserRecord] = None
    error: Optional[AuthError] = None

    @classmethod
    def success(cls, user: UserRecord) -> "AuthResult":
        return cls(ok=True, user=user)

    @classmethod
    def failure(cls, message: str) -> "AuthResult":
        return cls(ok=False, error=AuthError(message))


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_RE.fullmatch(email) is not None


def register(store: UserStore, credentials: UserCredentials) -> AuthResult:
    if not is_valid_email(credentials.email):
        return AuthResult.failure(EMAIL_WRONG)
    try:
        user = store.create_user(
            username=credentials.username,
            email=credentials.email,
            password_hash=hash_password(credentials.password),
        )
    except DuplicateUsernameError as e:
        return AuthResult.failure(user_exists_message(e.username))
    logger.info("Registered user %s", user.username)
    return AuthResult.success(user)


def login(store: UserStore, credentials: UserCredentials) -> AuthResult:
    user = store.find_user_by_username(credentials.username)
    if not user:
        logger.info("Login failed for %s: unknown user", credentials.username)
        return AuthResult.failure(USER_NOT_FOUND)

    if not verify_password(user.password_hash, credentials.password):
        logger.info("Login failed for %s: wrong password", user.username)
        return AuthResult.failure(PASSWORD_WRONG)

    if needs_rehash(user.password_hash):
        store.update_password_hash(user.id, hash_password(credentials.password))

    logger.info("Login ok for %s", user.username)
    return AuthResult.success(user)


def logout(sessions: SessionStore, request: Request) -> Response:
    session = sessions.get_session(request.headers.get("cookie"))
    resp = RedirectResponse(url="/login", status_code=303)
    return sessions.destroy_session(session, resp)
