# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication helpers.

This package provides:
- Password hashing/verification (argon2)
- User store over the SQL `users` table (SQLAlchemy)
- Signed session cookies (itsdangerous)
- The login / register / logout flows
"""
