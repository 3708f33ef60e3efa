from __future__ import annotations

from datetime import datetime, timezone

from app.application.dto.auth import IssuedSession
from app.application.ports.session_codec_port import SessionCodecPort


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def issue_session(*, session_codec: SessionCodecPort, subject: str, email: str) -> IssuedSession:
    token, claims = session_codec.create(subject=subject, email=email, now=utcnow())
    return IssuedSession(token=token, claims=claims)
