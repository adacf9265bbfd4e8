# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from logingate.errors import ConfigError

# Anchor relative defaults to the project root, not the current working directory.
BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_DATABASE_URL = f"sqlite:///{BASE_DIR / 'data' / 'logingate.db'}"

TRUTHY = {"1", "true", "yes", "y"}


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY


@dataclass(frozen=True)
class Settings:
    secret_key: str
    database_url: str = DEFAULT_DATABASE_URL
    cookie_name: str = "lg_session"
    session_max_age: int = 28800  # 8 hours
    session_salt: str = "logingate.session.v1"
    cookie_secure: bool = False
    users_seed_path: Optional[Path] = None
    log_level: str = "INFO"


def load_settings() -> Settings:
    secret = os.getenv("SECRET_KEY") or os.getenv("LG_SECRET_KEY")
    if not secret:
        raise ConfigError("Missing SECRET_KEY (or LG_SECRET_KEY) in environment")

    seed = os.getenv("LG_USERS_SEED_PATH", "").strip()
    return Settings(
        secret_key=secret,
        database_url=os.getenv("LG_DATABASE_URL", DEFAULT_DATABASE_URL),
        cookie_name=os.getenv("LG_COOKIE_NAME", "lg_session"),
        session_max_age=int(os.getenv("LG_SESSION_MAX_AGE", "28800")),
        session_salt=os.getenv("LG_SESSION_SALT", "logingate.session.v1"),
        cookie_secure=_flag("LG_COOKIE_SECURE"),
        users_seed_path=Path(seed).resolve() if seed else None,
        log_level=os.getenv("LG_LOG_LEVEL", "INFO"),
    )
