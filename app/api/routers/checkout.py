from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_app_settings, get_create_checkout_session_use_case, get_verify_checkout_use_case
from app.api.errors import to_http_exception
from app.api.schemas.checkout import (
    CheckoutSessionResponse,
    CreateCheckoutSessionRequest,
    CreateCheckoutSessionResponse,
)
from app.application.dto.checkout import CreateCheckoutSessionInput
from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.verify_checkout import VerifyCheckoutUseCase
from app.domain.exceptions import DomainError
from app.shared.config import Settings


router = APIRouter()


@router.get("/api/checkout-session", response_model=CheckoutSessionResponse)
def get_checkout_session(
    session_id: str = Query(default=""),
    use_case: VerifyCheckoutUseCase = Depends(get_verify_checkout_use_case),
):
    try:
        output = use_case.execute(session_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    return CheckoutSessionResponse(
        id=output.id,
        mode=output.mode,
        customer_email=output.email,
        customer_id=output.identity_id,
        subscription_id=output.subscription_id,
        amount_total=output.amount_total,
        currency=output.currency,
        account_exists=output.account_exists,
    )


@router.post("/api/create-checkout-session", response_model=CreateCheckoutSessionResponse)
def create_checkout_session(
    req: CreateCheckoutSessionRequest,
    settings: Settings = Depends(get_app_settings),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    try:
        output = use_case.execute(
            CreateCheckoutSessionInput(
                price_id=req.price_id,
                mode=req.mode,
                success_url=settings.stripe_success_url,
                cancel_url=settings.stripe_cancel_url,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    return CreateCheckoutSessionResponse(session_id=output.session_id, url=output.url)
