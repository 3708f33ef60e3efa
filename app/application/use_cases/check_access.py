from __future__ import annotations

import logging

from app.application.dto.access import AccessDecision
from app.application.ports.billing_port import BillingPort
from app.application.ports.identity_repository_port import IdentityRepositoryPort
from app.application.ports.session_codec_port import SessionCodecPort
from app.domain.exceptions import UpstreamServiceError


logger = logging.getLogger(__name__)


class CheckAccessUseCase:
    """Per-request guard: a valid token alone never grants access.

    The identity and its subscription are re-read from the billing provider on
    every call, so a subscription cancelled after the session was issued is
    denied on the next request.
    """

    def __init__(
        self,
        *,
        session_codec: SessionCodecPort,
        identity_repository: IdentityRepositoryPort,
        billing_port: BillingPort,
    ):
        self._session_codec = session_codec
        self._identity_repository = identity_repository
        self._billing_port = billing_port

    def execute(self, *, token: str | None) -> AccessDecision:
        if not token:
            return AccessDecision.deny("unauthenticated")

        claims = self._session_codec.verify(token=token)
        if claims is None:
            return AccessDecision.deny("unauthenticated")

        try:
            identity = self._identity_repository.get(identity_id=claims.subject)
            if identity is None or not identity.is_provisioned:
                logger.info("check_access: unprovisioned identity=%s", claims.subject)
                return AccessDecision.deny("unauthenticated")

            if identity.subscription_id:
                subscription = self._billing_port.get_subscription_status(
                    subscription_id=identity.subscription_id
                )
                if subscription is None or not subscription.is_active:
                    logger.info(
                        "check_access: inactive subscription identity=%s subscription=%s",
                        identity.id,
                        identity.subscription_id,
                    )
                    return AccessDecision.deny("inactive_subscription")
        except UpstreamServiceError:
            logger.warning("check_access: billing lookup failed identity=%s", claims.subject)
            return AccessDecision.deny("unauthenticated")

        return AccessDecision.allow(email=identity.email or claims.email)
