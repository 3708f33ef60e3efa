from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionClaims:
    subject: str
    email: str
    issued_at: datetime
    expires_at: datetime
