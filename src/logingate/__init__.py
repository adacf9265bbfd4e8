# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""logingate: login / registration page backed by a SQL user table."""

__version__ = "0.1.0"
