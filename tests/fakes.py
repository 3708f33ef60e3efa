from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Mapping

from app.application.dto.checkout import CreateCheckoutSessionOutput
from app.domain.entities.checkout import CheckoutSession
from app.domain.entities.identity import IdentityRecord
from app.domain.entities.session import SessionClaims
from app.domain.entities.subscription import SubscriptionStatus
from app.domain.exceptions import AccountAlreadyExistsError


class FakeIdentityRepository:
    def __init__(self, identities: list[IdentityRecord] | None = None):
        self.identities: dict[str, IdentityRecord] = {identity.id: identity for identity in identities or []}
        self.merge_calls: list[tuple[str, dict[str, str]]] = []

    def add(self, identity: IdentityRecord) -> None:
        self.identities[identity.id] = identity

    def get(self, *, identity_id: str) -> IdentityRecord | None:
        return self.identities.get(identity_id)

    def find_by_email(self, *, email: str) -> list[IdentityRecord]:
        return [identity for identity in self.identities.values() if identity.email == email]

    def merge_update(
        self,
        *,
        identity_id: str,
        fields: Mapping[str, str],
        if_absent: str | None = None,
    ) -> IdentityRecord:
        identity = self.identities[identity_id]
        if if_absent and identity.metadata.get(if_absent):
            raise AccountAlreadyExistsError("An account with this email already exists.")
        updated = replace(identity, metadata={**identity.metadata, **fields})
        self.identities[identity_id] = updated
        self.merge_calls.append((identity_id, dict(fields)))
        return updated


class FakeBillingPort:
    def __init__(self):
        self.checkouts: dict[str, CheckoutSession] = {}
        self.subscriptions: dict[str, SubscriptionStatus] = {}
        self.created: list[dict] = []

    def add_checkout(self, checkout: CheckoutSession) -> None:
        self.checkouts[checkout.id] = checkout

    def set_subscription(self, subscription_id: str, status: str) -> None:
        self.subscriptions[subscription_id] = SubscriptionStatus(id=subscription_id, status=status)

    def get_checkout_session(self, *, reference: str) -> CheckoutSession | None:
        return self.checkouts.get(reference)

    def get_subscription_status(self, *, subscription_id: str) -> SubscriptionStatus | None:
        return self.subscriptions.get(subscription_id)

    def create_checkout_session(
        self,
        *,
        price_id: str,
        mode: str,
        success_url: str,
        cancel_url: str,
    ) -> CreateCheckoutSessionOutput:
        self.created.append(
            {"price_id": price_id, "mode": mode, "success_url": success_url, "cancel_url": cancel_url}
        )
        return CreateCheckoutSessionOutput(session_id="cs_new", url="https://checkout.test/cs_new")


class FakePasswordHasher:
    def __init__(self):
        self.hash_calls = 0
        self.dummy_calls = 0

    def hash(self, plain_password: str) -> str:
        self.hash_calls += 1
        return f"hashed::{self.hash_calls}::{plain_password}"

    def verify(self, plain_password: str, password_hash: str) -> bool:
        return password_hash.endswith(f"::{plain_password}")

    def dummy_verify(self) -> None:
        self.dummy_calls += 1


class FakeSessionCodec:
    def create(self, *, subject: str, email: str, now: datetime | None = None) -> tuple[str, SessionClaims]:
        issued_at = now or datetime.now(timezone.utc)
        return f"token::{subject}::{email}", SessionClaims(
            subject=subject,
            email=email,
            issued_at=issued_at,
            expires_at=issued_at + timedelta(days=30),
        )

    def verify(self, *, token: str) -> SessionClaims | None:
        parts = token.split("::")
        if len(parts) != 3 or parts[0] != "token":
            return None
        now = datetime.now(timezone.utc)
        return SessionClaims(subject=parts[1], email=parts[2], issued_at=now, expires_at=now + timedelta(days=30))


def make_checkout(
    *,
    checkout_id: str = "cs_test_123",
    mode: str = "recurring",
    status: str | None = "complete",
    payment_status: str | None = "paid",
    customer_id: str | None = "cus_1",
    customer_email: str | None = "buyer@example.com",
    fallback_email: str | None = None,
    subscription_id: str | None = "sub_1",
) -> CheckoutSession:
    return CheckoutSession(
        id=checkout_id,
        mode=mode,
        status=status,
        payment_status=payment_status,
        customer_id=customer_id,
        customer_email=customer_email,
        fallback_email=fallback_email,
        subscription_id=subscription_id,
        amount_total=1900,
        currency="usd",
    )
