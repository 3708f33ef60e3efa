from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from app.application.ports.session_codec_port import SessionCodecPort
from app.domain.entities.session import SessionClaims


SESSION_TTL = timedelta(days=30)
ALGORITHM = "HS256"


class JwtSessionCodec(SessionCodecPort):
    def __init__(self, *, jwt_secret: str):
        self._jwt_secret = jwt_secret

    def create(self, *, subject: str, email: str, now: datetime | None = None) -> tuple[str, SessionClaims]:
        issued_at = (now or utcnow()).replace(microsecond=0)
        expires_at = issued_at + SESSION_TTL
        payload = {
            "sub": subject,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._jwt_secret, algorithm=ALGORITHM)
        return token, SessionClaims(
            subject=subject,
            email=email,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def verify(self, *, token: str) -> SessionClaims | None:
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.PyJWTError:
            return None

        subject = payload.get("sub")
        email = payload.get("email")
        if not subject or not isinstance(subject, str):
            return None
        if not isinstance(email, str):
            return None

        return SessionClaims(
            subject=subject,
            email=email,
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
        )


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
