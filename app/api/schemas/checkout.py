from __future__ import annotations

from pydantic import BaseModel


class CheckoutSessionResponse(BaseModel):
    id: str
    mode: str
    customer_email: str
    customer_id: str | None
    subscription_id: str | None
    amount_total: int | None
    currency: str | None
    account_exists: bool


class CreateCheckoutSessionRequest(BaseModel):
    price_id: str = ""
    mode: str = ""


class CreateCheckoutSessionResponse(BaseModel):
    session_id: str
    url: str | None
