from __future__ import annotations

from typing import Protocol

from app.application.dto.checkout import CreateCheckoutSessionOutput
from app.domain.entities.checkout import CheckoutSession
from app.domain.entities.subscription import SubscriptionStatus


class BillingPort(Protocol):
    def get_checkout_session(self, *, reference: str) -> CheckoutSession | None:
        ...

    def get_subscription_status(self, *, subscription_id: str) -> SubscriptionStatus | None:
        ...

    def create_checkout_session(
        self,
        *,
        price_id: str,
        mode: str,
        success_url: str,
        cancel_url: str,
    ) -> CreateCheckoutSessionOutput:
        ...
