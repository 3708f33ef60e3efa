from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SubscriptionStatus:
    id: str
    status: str

    @property
    def is_active(self) -> bool:
        return is_subscription_active(self.status)


def is_subscription_active(status: str) -> bool:
    return status == "active"
