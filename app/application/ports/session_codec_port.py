from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.domain.entities.session import SessionClaims


class SessionCodecPort(Protocol):
    def create(self, *, subject: str, email: str, now: datetime | None = None) -> tuple[str, SessionClaims]:
        ...

    def verify(self, *, token: str) -> SessionClaims | None:
        ...
