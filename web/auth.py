from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from timebill.exceptions import InvalidRequest, Unauthenticated
from web.deps import get_user_service
from web.errors import error_response

logger = logging.getLogger(__name__)

router = APIRouter()

# Simple in-memory rate limiter for login attempts
_login_attempts: dict[str, list[float]] = {}
_MAX_ATTEMPTS = 5
_LOCKOUT_SECONDS = 60


def _recent_attempts(ip: str) -> list[float]:
    now = time.monotonic()
    attempts = [t for t in _login_attempts.get(ip, []) if now - t < _LOCKOUT_SECONDS]
    _login_attempts[ip] = attempts
    return attempts


def _is_rate_limited(ip: str) -> bool:
    return len(_recent_attempts(ip)) >= _MAX_ATTEMPTS


def _record_failed_attempt(ip: str) -> None:
    _recent_attempts(ip).append(time.monotonic())


def _clear_attempts(ip: str) -> None:
    _login_attempts.pop(ip, None)


@router.post("/login")
async def login(request: Request):
    client_ip = request.client.host if request.client else "unknown"

    if _is_rate_limited(client_ip):
        logger.warning("Rate-limited login attempt from %s", client_ip)
        return error_response(429, "Too many login attempts, try again in a minute")

    form = await request.form()
    username = str(form.get("username", "")).strip()
    password = str(form.get("password", ""))
    if not username or not password:
        raise InvalidRequest("username and password are required")

    user = get_user_service(request).authenticate(username, password)
    if user is None:
        _record_failed_attempt(client_ip)
        logger.warning("Failed login attempt for username=%s from %s", username, client_ip)
        raise Unauthenticated("Invalid username or password")

    _clear_attempts(client_ip)
    request.session.clear()
    request.session["user_id"] = user.id
    request.session["username"] = user.username
    logger.info("User %s logged in", user.username)
    return {"id": user.id, "username": user.username}


@router.post("/logout")
async def logout(request: Request):
    username = request.session.get("username")
    request.session.clear()
    if username:
        logger.info("User %s logged out", username)
    return JSONResponse({"ok": True})
