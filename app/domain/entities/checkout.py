from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


CheckoutMode = Literal["one_time", "recurring", "setup"]


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    mode: CheckoutMode
    status: str | None
    payment_status: str | None
    customer_id: str | None
    customer_email: str | None
    fallback_email: str | None
    subscription_id: str | None
    amount_total: int | None
    currency: str | None


def is_payment_complete(checkout: CheckoutSession) -> bool:
    return checkout.payment_status == "paid" or checkout.status == "complete"
