# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parsing and shape validation of the login form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from logingate.auth.credentials import EMAIL_RE, UserCredentials

LOGIN = "login"
REGISTER = "register"
LOGIN_TYPES = (LOGIN, REGISTER)

FIELDS_INVALID = "Fields invalid"
LOGIN_TYPE_INVALID = "Login type invalid"


class UserFormCredentials(BaseModel):
    username: str = Field(min_length=3)
    email: Optional[str] = None
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def _email_shape(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not EMAIL_RE.fullmatch(v):
            raise ValueError("Invalid email")
        return v


@dataclass
class LoginForm:
    login_type: str
    username: str
    email: Optional[str]
    password: str
    redirect_to: str = "/"
    field_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.field_errors

    def credentials(self) -> UserCredentials:
        return UserCredentials(username=self.username, email=self.email, password=self.password)


def safe_redirect_target(value: Optional[str]) -> str:
    """Only local absolute paths are allowed as post-login targets."""
    v = (value or "").strip()
    if not v.startswith("/") or v.startswith("//") or "\\" in v:
        return "/"
    return v


def _error_message(err: dict) -> str:
    msg = str(err.get("msg") or "Invalid value")
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


def validate_credentials(username: str, email: Optional[str], password: str) -> Dict[str, str]:
    try:
        UserFormCredentials(username=username, email=email, password=password)
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for err in e.errors():
            loc = err.get("loc") or ("__root__",)
            errors.setdefault(str(loc[0]), _error_message(err))
        return errors
    return {}


def parse_login_form(data) -> LoginForm:
    """Build a `LoginForm` from submitted form data (any mapping with `.get`)."""
    username = str(data.get("username") or "")
    email = str(data.get("email") or "").strip() or None
    password = str(data.get("password") or "")
    return LoginForm(
        login_type=str(data.get("loginType") or ""),
        username=username,
        email=email,
        password=password,
        redirect_to=safe_redirect_target(data.get("redirectTo")),
        field_errors=validate_credentials(username, email, password),
    )
