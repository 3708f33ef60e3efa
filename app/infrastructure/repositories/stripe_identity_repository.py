from __future__ import annotations

import logging
from typing import Any, Mapping

import stripe

from app.application.ports.identity_repository_port import IdentityRepositoryPort
from app.domain.entities.identity import IdentityRecord
from app.domain.exceptions import AccountAlreadyExistsError, UpstreamServiceError
from app.infrastructure.clients.stripe_client import as_str_dict, field, is_missing_resource


logger = logging.getLogger(__name__)

EMAIL_LOOKUP_LIMIT = 5


class StripeIdentityRepository(IdentityRepositoryPort):
    """Stripe customers used as identity records; credentials live in customer metadata."""

    def __init__(self, *, client: stripe.StripeClient):
        self._client = client

    def get(self, *, identity_id: str) -> IdentityRecord | None:
        try:
            customer = self._client.customers.retrieve(identity_id)
        except stripe.StripeError as exc:
            if is_missing_resource(exc):
                return None
            logger.exception("stripe_identity_repo: customer retrieve failed identity=%s", identity_id)
            raise UpstreamServiceError("Unable to load account.") from exc
        return _to_identity(customer)

    def find_by_email(self, *, email: str) -> list[IdentityRecord]:
        try:
            result = self._client.customers.list(params={"email": email, "limit": EMAIL_LOOKUP_LIMIT})
        except stripe.StripeError as exc:
            logger.exception("stripe_identity_repo: customer lookup by email failed")
            raise UpstreamServiceError("Unable to load account.") from exc

        records = []
        for customer in field(result, "data") or []:
            record = _to_identity(customer)
            if record is not None:
                records.append(record)
        return records

    def merge_update(
        self,
        *,
        identity_id: str,
        fields: Mapping[str, str],
        if_absent: str | None = None,
    ) -> IdentityRecord:
        current = self.get(identity_id=identity_id)
        if current is None:
            raise UpstreamServiceError("Unable to update account.")
        if if_absent and current.metadata.get(if_absent):
            logger.info("stripe_identity_repo: key already set identity=%s key=%s", identity_id, if_absent)
            raise AccountAlreadyExistsError("An account with this email already exists.")

        metadata = {**current.metadata, **fields}
        try:
            customer = self._client.customers.update(identity_id, params={"metadata": metadata})
        except stripe.StripeError as exc:
            logger.exception("stripe_identity_repo: customer update failed identity=%s", identity_id)
            raise UpstreamServiceError("Unable to update account.") from exc

        updated = _to_identity(customer)
        if updated is None:
            raise UpstreamServiceError("Unable to update account.")
        return updated


def _to_identity(customer: Any) -> IdentityRecord | None:
    if customer is None or field(customer, "deleted"):
        return None
    customer_id = field(customer, "id")
    if not customer_id:
        return None
    return IdentityRecord(
        id=str(customer_id),
        email=field(customer, "email") or None,
        metadata=as_str_dict(field(customer, "metadata")),
    )
