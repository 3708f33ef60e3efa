from __future__ import annotations

from app.application.dto.checkout import CreateCheckoutSessionInput, CreateCheckoutSessionOutput
from app.application.ports.billing_port import BillingPort
from app.domain.exceptions import InvalidInputError


ALLOWED_MODES = {"payment", "subscription"}


class CreateCheckoutSessionUseCase:
    def __init__(self, *, billing_port: BillingPort):
        self._billing_port = billing_port

    def execute(self, command: CreateCheckoutSessionInput) -> CreateCheckoutSessionOutput:
        price_id = (command.price_id or "").strip()
        if not price_id:
            raise InvalidInputError("Missing price_id parameter.")
        if command.mode not in ALLOWED_MODES:
            raise InvalidInputError("Invalid checkout mode.")

        return self._billing_port.create_checkout_session(
            price_id=price_id,
            mode=command.mode,
            success_url=command.success_url,
            cancel_url=command.cancel_url,
        )
