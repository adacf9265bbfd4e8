# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy.

Only infrastructure problems are raised. Credential failures (unknown user,
wrong password, bad email...) are returned as values, see
`logingate.auth.credentials.AuthResult`.
"""

from __future__ import annotations


class LoginGateError(Exception):
    """Base class for all logingate errors."""


class ConfigError(LoginGateError):
    pass


class StoreError(LoginGateError):
    """A database operation failed."""

    def __init__(self, message: str, operation: str = "unknown"):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        return f"{self.message} ({self.operation})"


class DuplicateUsernameError(StoreError):
    """The UNIQUE constraint on users.username rejected an insert."""

    def __init__(self, username: str):
        super().__init__(f"User with username {username} already exists", "create_user")
        self.username = username
