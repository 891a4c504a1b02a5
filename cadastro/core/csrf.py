"""
CSRF protection for the form posts.

GET / issues a token in a cookie and every rendered form echoes it in a
hidden ``csrf_token`` field. A post is accepted only when both values match
and, if the browser sent Origin/Referer, it points at this same host.
"""
from __future__ import annotations

import secrets
from urllib import parse as urlparse

from fastapi import HTTPException, Request, Response

from cadastro.core.config import Settings

COOKIE_NAME = "csrf_token"
TOKEN_MIN_LENGTH = 16
COOKIE_MAX_AGE = 7 * 24 * 60 * 60


def issue_token(request: Request) -> str:
    """Reuse the cookie token when it looks sane, otherwise mint a new one."""
    current = request.cookies.get(COOKIE_NAME) or ""
    if len(current) >= TOKEN_MIN_LENGTH:
        return current
    return secrets.token_urlsafe(32)


def attach_token(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.app_env == "prod",
        samesite="strict",
        path="/",
    )


def _same_origin(request: Request) -> bool:
    source = request.headers.get("origin") or request.headers.get("referer")
    if not source:
        return True
    try:
        parsed = urlparse.urlparse(source)
    except ValueError:
        return False
    host = (request.headers.get("host") or "").split(":", 1)[0].lower()
    if (parsed.hostname or "").lower() != host:
        return False
    return parsed.scheme == request.url.scheme


def check_form_token(request: Request, form_token: str | None) -> None:
    """Raise 403 unless the hidden field matches the cookie from the same origin."""
    cookie_token = request.cookies.get(COOKIE_NAME) or ""
    supplied = (form_token or "").strip()
    if not cookie_token or not supplied:
        raise HTTPException(403, "Token do formulario ausente.")
    if not secrets.compare_digest(cookie_token, supplied):
        raise HTTPException(403, "Token do formulario invalido.")
    if not _same_origin(request):
        raise HTTPException(403, "Origem invalida.")
