from __future__ import annotations

import logging

from app.application.dto.checkout import CheckoutOutcome
from app.application.ports.billing_port import BillingPort
from app.application.ports.identity_repository_port import IdentityRepositoryPort
from app.domain.entities.checkout import CheckoutSession, is_payment_complete
from app.domain.entities.identity import IdentityRecord
from app.domain.exceptions import (
    CheckoutIncompleteError,
    CheckoutNotFoundError,
    InvalidInputError,
    MissingEmailError,
)


logger = logging.getLogger(__name__)


class VerifyCheckoutUseCase:
    def __init__(self, *, billing_port: BillingPort, identity_repository: IdentityRepositoryPort):
        self._billing_port = billing_port
        self._identity_repository = identity_repository

    def execute(self, reference: str) -> CheckoutOutcome:
        checkout = self.load(reference)
        return self.evaluate(checkout)

    def load(self, reference: str) -> CheckoutSession:
        reference = (reference or "").strip()
        if not reference:
            raise InvalidInputError("Missing session_id parameter.")

        checkout = self._billing_port.get_checkout_session(reference=reference)
        if checkout is None:
            raise CheckoutNotFoundError("Checkout session not found.")
        return checkout

    def evaluate(self, checkout: CheckoutSession) -> CheckoutOutcome:
        """Checks completeness, then resolves the subscriber identity and email.

        Email priority is the address captured on the checkout form, then the
        linked customer's stored email, then the checkout's fallback field.
        """
        if not is_payment_complete(checkout):
            logger.info(
                "verify_checkout: incomplete checkout=%s status=%s payment_status=%s",
                checkout.id,
                checkout.status,
                checkout.payment_status,
            )
            raise CheckoutIncompleteError("Checkout session incomplete.")

        identity: IdentityRecord | None = None
        if checkout.customer_id:
            identity = self._identity_repository.get(identity_id=checkout.customer_id)

        email = checkout.customer_email or (identity.email if identity else None) or checkout.fallback_email
        if not email:
            raise MissingEmailError("Unable to determine subscriber email for this checkout.")

        return CheckoutOutcome(
            id=checkout.id,
            mode=checkout.mode,
            email=email,
            identity_id=identity.id if identity else checkout.customer_id,
            subscription_id=checkout.subscription_id,
            amount_total=checkout.amount_total,
            currency=checkout.currency,
            account_exists=bool(identity and identity.is_provisioned),
            identity=identity,
        )
