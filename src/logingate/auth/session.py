# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from itsdangerous import BadSignature, BadTimeSignature, URLSafeTimedSerializer
from starlette.requests import cookie_parser

from logingate.auth.users import UserRecord, UserStore
from logingate.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    user_id: str


class SessionStore:
    """Stateless sessions: the cookie carries the signed user id."""

    def __init__(self, settings: Settings):
        self.cookie_name = settings.cookie_name
        self.max_age = settings.session_max_age
        self.secure = settings.cookie_secure
        self._serializer = URLSafeTimedSerializer(
            secret_key=settings.secret_key,
            salt=settings.session_salt,
        )

    def cookie_settings(self) -> dict:
        return {"httponly": True, "samesite": "lax", "secure": self.secure}

    def sign(self, user_id: str) -> str:
        return self._serializer.dumps({"uid": user_id})

    def verify(self, token: str) -> Optional[Session]:
        if not token:
            return None
        try:
            data = self._serializer.loads(token, max_age=self.max_age)
        except (BadSignature, BadTimeSignature):
            return None
        uid = str((data or {}).get("uid") or "").strip() if isinstance(data, dict) else ""
        if not uid:
            return None
        return Session(user_id=uid)

    def create_session(self, user_id: str, redirect_to: str = "/") -> RedirectResponse:
        resp = RedirectResponse(url=redirect_to or "/", status_code=303)
        resp.set_cookie(
            self.cookie_name,
            self.sign(user_id),
            max_age=self.max_age,
            **self.cookie_settings(),
        )
        return resp

    def get_session(self, cookie_header: Optional[str]) -> Optional[Session]:
        """Parse a raw Cookie header and verify our session cookie in it."""
        if not cookie_header:
            return None
        return self.verify(cookie_parser(cookie_header).get(self.cookie_name, ""))

    def destroy_session(self, session: Optional[Session], response: Response) -> Response:
        if session is not None:
            logger.info("Session closed for user %s", session.user_id)
        response.delete_cookie(self.cookie_name, **self.cookie_settings())
        return response

    def get_user_from_request(self, request: Request, store: UserStore) -> Optional[UserRecord]:
        sess = self.verify(request.cookies.get(self.cookie_name, ""))
        if not sess:
            return None
        return store.find_user_by_id(sess.user_id)
