# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from logingate.auth import credentials
from logingate.auth.seed import seed_users
from logingate.auth.session import SessionStore
from logingate.auth.users import SqlUserStore
from logingate.config import Settings, load_settings
from logingate.db import Database
from logingate.forms import (
    FIELDS_INVALID,
    LOGIN,
    LOGIN_TYPE_INVALID,
    LOGIN_TYPES,
    LoginForm,
    parse_login_form,
    safe_redirect_target,
)
from logingate.observability import setup_logging
from logingate.permissions import CurrentUser, current_user_optional, require_user

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _render(request: Request, template_name: str, ctx: dict, status_code: int = 200):
    """TemplateResponse wrapper injecting the current user."""
    base_ctx = {
        "request": request,
        "current_user": getattr(request.state, "user", None),
    }
    merged = {**base_ctx, **(ctx or {})}
    return templates.TemplateResponse(request, template_name, merged, status_code=status_code)


def _login_page(
    request: Request,
    *,
    redirect_to: str = "/",
    form: Optional[LoginForm] = None,
    error: str = "",
    status_code: int = 200,
):
    return _render(
        request,
        "login.html",
        {
            "redirect_to": redirect_to,
            "login_type": form.login_type if form and form.login_type in LOGIN_TYPES else LOGIN,
            "username": form.username if form else "",
            "email": (form.email or "") if form else "",
            "field_errors": form.field_errors if form else {},
            "error": error,
        },
        status_code=status_code,
    )


def handle_login_form(request: Request, form: LoginForm):
    """Page action behind POST /login: returns a redirect with session or the re-rendered form."""
    users: SqlUserStore = request.app.state.users
    sessions: SessionStore = request.app.state.sessions

    def fail(message: str):
        return _login_page(request, redirect_to=form.redirect_to, form=form, error=message, status_code=400)

    if form.login_type not in LOGIN_TYPES:
        logger.info("Rejected login form with loginType=%r", form.login_type)
        return fail(LOGIN_TYPE_INVALID)

    if not form.valid:
        return fail(FIELDS_INVALID)

    if form.login_type == LOGIN:
        result = credentials.login(users, form.credentials())
    else:
        if users.find_user_by_username(form.username):
            return fail(credentials.user_exists_message(form.username))
        result = credentials.register(users, form.credentials())

    if not result.ok:
        return fail(result.error.message)
    return sessions.create_session(result.user.id, form.redirect_to)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    db = Database(settings.database_url)
    db.create_all()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        if settings.users_seed_path:
            seed_users(app.state.users, settings.users_seed_path)
        yield
        db.dispose()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db
    app.state.users = SqlUserStore(db)
    app.state.sessions = SessionStore(settings)

    @app.middleware("http")
    async def _auth_middleware(request: Request, call_next):
        request.state.user = None
        if not request.url.path.startswith("/static"):
            request.state.user = await run_in_threadpool(current_user_optional, request)
        return await call_next(request)

    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    @app.get("/login", response_class=HTMLResponse)
    def login_get(request: Request, redirectTo: str = "/"):
        if getattr(request.state, "user", None):
            return RedirectResponse(url="/", status_code=303)
        return _login_page(request, redirect_to=safe_redirect_target(redirectTo))

    @app.post("/login")
    def login_post(
        request: Request,
        loginType: str = Form(""),
        username: str = Form(""),
        email: str = Form(""),
        password: str = Form(""),
        redirectTo: str = Form("/"),
    ):
        form = parse_login_form(
            {
                "loginType": loginType,
                "username": username,
                "email": email,
                "password": password,
                "redirectTo": redirectTo,
            }
        )
        return handle_login_form(request, form)

    @app.post("/logout")
    def logout_post(request: Request):
        return credentials.logout(request.app.state.sessions, request)

    @app.get("/", response_class=HTMLResponse)
    def home(request: Request, user: CurrentUser = Depends(require_user)):
        return _render(request, "index.html", {"user": user})

    @app.get("/healthz")
    def healthz(request: Request):
        if request.app.state.db.health_check():
            return {"status": "ok"}
        return JSONResponse({"status": "unavailable"}, status_code=503)

    return app
