from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


DenialReason = Literal["unauthenticated", "inactive_subscription"]


@dataclass(frozen=True)
class AccessContext:
    email: str


@dataclass(frozen=True)
class AccessDecision:
    context: AccessContext | None
    reason: DenialReason | None = None

    @property
    def allowed(self) -> bool:
        return self.context is not None

    @classmethod
    def allow(cls, email: str) -> AccessDecision:
        return cls(context=AccessContext(email=email))

    @classmethod
    def deny(cls, reason: DenialReason) -> AccessDecision:
        return cls(context=None, reason=reason)
