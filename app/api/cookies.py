from __future__ import annotations

from fastapi import Response

from app.infrastructure.security.session_codec import SESSION_TTL


SESSION_COOKIE_NAME = "arketype_session"
SESSION_COOKIE_MAX_AGE = int(SESSION_TTL.total_seconds())


def set_session_cookie(response: Response, token: str, *, secure: bool) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=secure,
        max_age=SESSION_COOKIE_MAX_AGE,
        path="/",
    )


def clear_session_cookie(response: Response, *, secure: bool) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        secure=secure,
        httponly=True,
        samesite="lax",
    )
