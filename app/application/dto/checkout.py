from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.checkout import CheckoutMode
from app.domain.entities.identity import IdentityRecord


@dataclass(frozen=True)
class CheckoutOutcome:
    id: str
    mode: CheckoutMode
    email: str
    identity_id: str | None
    subscription_id: str | None
    amount_total: int | None
    currency: str | None
    account_exists: bool
    identity: IdentityRecord | None = None


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    price_id: str
    mode: str
    success_url: str
    cancel_url: str


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    session_id: str
    url: str | None
