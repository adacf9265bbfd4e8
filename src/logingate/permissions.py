# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from fastapi import HTTPException, Request

from logingate.auth.session import SessionStore
from logingate.auth.users import UserStore


@dataclass(frozen=True)
class CurrentUser:
    id: str
    username: str
    email: Optional[str]


def load_user_from_request(request: Request) -> Optional[CurrentUser]:
    sessions: SessionStore = request.app.state.sessions
    store: UserStore = request.app.state.users
    u = sessions.get_user_from_request(request, store)
    if not u:
        return None
    return CurrentUser(id=u.id, username=u.username, email=u.email)


def current_user_optional(request: Request) -> Optional[CurrentUser]:
    u = getattr(request.state, "user", None)
    if u is not None:
        return u
    return load_user_from_request(request)


def require_user(request: Request) -> CurrentUser:
    u = current_user_optional(request)
    if u:
        return u
    next_url = str(request.url.path)
    if request.url.query:
        next_url += "?" + request.url.query
    loc = f"/login?redirectTo={quote(next_url, safe='/')}"
    raise HTTPException(status_code=303, headers={"Location": loc})
