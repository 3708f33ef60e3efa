from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import stripe

from app.application.dto.checkout import CreateCheckoutSessionOutput
from app.application.ports.billing_port import BillingPort
from app.domain.entities.checkout import CheckoutMode, CheckoutSession
from app.domain.entities.subscription import SubscriptionStatus
from app.domain.exceptions import UpstreamServiceError


logger = logging.getLogger(__name__)

CHECKOUT_MODES: dict[str, CheckoutMode] = {
    "payment": "one_time",
    "subscription": "recurring",
    "setup": "setup",
}


def build_stripe_client(*, secret_key: str, api_version: str) -> stripe.StripeClient:
    return stripe.StripeClient(secret_key, stripe_version=api_version)


def is_missing_resource(exc: stripe.StripeError) -> bool:
    return isinstance(exc, stripe.InvalidRequestError) and (
        exc.code == "resource_missing" or exc.http_status == 404
    )


def field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def as_str_dict(obj: Any) -> dict[str, str]:
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return {str(key): str(value) for key, value in obj.items()}
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return {str(key): str(value) for key, value in to_dict().items()}
    return {}


def object_id(value: Any) -> str | None:
    """Ids of linked objects arrive either bare or expanded."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    linked_id = field(value, "id")
    return str(linked_id) if linked_id else None


class StripeClient(BillingPort):
    def __init__(self, *, client: stripe.StripeClient):
        self._client = client

    def get_checkout_session(self, *, reference: str) -> CheckoutSession | None:
        try:
            session = self._client.checkout.sessions.retrieve(
                reference,
                params={"expand": ["subscription"]},
            )
        except stripe.StripeError as exc:
            if is_missing_resource(exc):
                return None
            logger.exception("stripe_client: checkout retrieve failed reference=%s", reference)
            raise UpstreamServiceError("Unable to verify checkout session.") from exc

        if session is None:
            return None

        raw_mode = str(field(session, "mode") or "")
        customer_details = field(session, "customer_details")
        return CheckoutSession(
            id=str(field(session, "id") or reference),
            mode=CHECKOUT_MODES.get(raw_mode, "setup"),
            status=field(session, "status"),
            payment_status=field(session, "payment_status"),
            customer_id=object_id(field(session, "customer")),
            customer_email=field(customer_details, "email") or None,
            fallback_email=field(session, "customer_email") or None,
            subscription_id=object_id(field(session, "subscription")),
            amount_total=field(session, "amount_total"),
            currency=field(session, "currency"),
        )

    def get_subscription_status(self, *, subscription_id: str) -> SubscriptionStatus | None:
        try:
            subscription = self._client.subscriptions.retrieve(subscription_id)
        except stripe.StripeError as exc:
            if is_missing_resource(exc):
                logger.warning("stripe_client: subscription not found subscription=%s", subscription_id)
                return None
            logger.exception("stripe_client: subscription retrieve failed subscription=%s", subscription_id)
            raise UpstreamServiceError("Unable to check subscription status.") from exc

        if subscription is None:
            return None
        return SubscriptionStatus(
            id=str(field(subscription, "id") or subscription_id),
            status=str(field(subscription, "status") or ""),
        )

    def create_checkout_session(
        self,
        *,
        price_id: str,
        mode: str,
        success_url: str,
        cancel_url: str,
    ) -> CreateCheckoutSessionOutput:
        payload: dict = {
            "mode": mode,
            "payment_method_types": ["card"],
            "line_items": [{"price": price_id, "quantity": 1}],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "allow_promotion_codes": True,
        }
        try:
            session = self._client.checkout.sessions.create(params=payload)
        except stripe.StripeError as exc:
            logger.exception("stripe_client: checkout create failed price=%s mode=%s", price_id, mode)
            raise UpstreamServiceError("Unable to create checkout session.") from exc

        session_id = field(session, "id")
        if not session_id:
            raise UpstreamServiceError("Unable to create checkout session.")
        return CreateCheckoutSessionOutput(
            session_id=str(session_id),
            url=field(session, "url"),
        )
