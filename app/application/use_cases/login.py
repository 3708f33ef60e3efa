from __future__ import annotations

import logging

from app.application.dto.auth import LoginInput, LoginOutput
from app.application.ports.billing_port import BillingPort
from app.application.ports.identity_repository_port import IdentityRepositoryPort
from app.application.ports.password_hasher_port import PasswordHasherPort
from app.application.ports.session_codec_port import SessionCodecPort
from app.domain.exceptions import InvalidCredentialsError, InvalidInputError, SubscriptionInactiveError

from .auth_common import issue_session


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


class LoginUseCase:
    def __init__(
        self,
        *,
        identity_repository: IdentityRepositoryPort,
        billing_port: BillingPort,
        password_hasher: PasswordHasherPort,
        session_codec: SessionCodecPort,
    ):
        self._identity_repository = identity_repository
        self._billing_port = billing_port
        self._password_hasher = password_hasher
        self._session_codec = session_codec

    def execute(self, command: LoginInput) -> LoginOutput:
        email = (command.email or "").strip()
        if not email:
            raise InvalidInputError("Email is required.")
        if not command.password:
            raise InvalidInputError("Password is required.")

        candidates = self._identity_repository.find_by_email(email=email)
        identity = next((candidate for candidate in candidates if candidate.is_provisioned), None)

        if identity is None:
            # Keeps unknown-email and wrong-password responses equally slow.
            self._password_hasher.dummy_verify()
            logger.info("login: no provisioned identity candidates=%s", len(candidates))
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        if not self._password_hasher.verify(command.password, identity.password_hash):
            logger.info("login: password mismatch identity=%s", identity.id)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        if identity.subscription_id:
            subscription = self._billing_port.get_subscription_status(subscription_id=identity.subscription_id)
            if subscription is None or not subscription.is_active:
                logger.info(
                    "login: inactive subscription identity=%s subscription=%s status=%s",
                    identity.id,
                    identity.subscription_id,
                    subscription.status if subscription else None,
                )
                raise SubscriptionInactiveError("Your subscription is not active. Please update billing.")

        return LoginOutput(
            identity_id=identity.id,
            session=issue_session(
                session_codec=self._session_codec,
                subject=identity.id,
                email=identity.email or email,
            ),
        )
