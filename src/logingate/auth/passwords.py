# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_PH = PasswordHasher()


def hash_password(plain: str) -> str:
    return _PH.hash(plain or "")


def verify_password(hash_value: str, plain: str) -> bool:
    if not hash_value:
        return False
    try:
        return _PH.verify(hash_value, plain or "")
    except VerifyMismatchError:
        return False
    except (VerificationError, InvalidHashError):
        # Stored value is not an argon2 hash we can check.
        return False


def needs_rehash(hash_value: str) -> bool:
    try:
        return _PH.check_needs_rehash(hash_value)
    except InvalidHashError:
        return True
