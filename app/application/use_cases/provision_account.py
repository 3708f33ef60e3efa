from __future__ import annotations

import logging
import secrets

from app.application.dto.auth import ProvisionAccountInput, ProvisionAccountOutput
from app.application.ports.identity_repository_port import IdentityRepositoryPort
from app.application.ports.password_hasher_port import PasswordHasherPort
from app.application.ports.session_codec_port import SessionCodecPort
from app.domain.entities.identity import PASSWORD_HASH_KEY, SUBSCRIPTION_ID_KEY, USER_ID_KEY
from app.domain.exceptions import (
    AccountAlreadyExistsError,
    CheckoutNotApplicableError,
    InvalidInputError,
    MissingCustomerError,
)

from .auth_common import issue_session
from .verify_checkout import VerifyCheckoutUseCase


logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def generate_user_id() -> str:
    return secrets.token_urlsafe(16)


class ProvisionAccountUseCase:
    """Attaches password credentials to the customer behind a paid subscription checkout.

    The stored password hash is write-once: it is checked before hashing, and the
    repository checks it again on the same read that feeds the metadata write, so a
    retried or double-submitted request ends in ``AccountAlreadyExistsError``
    instead of replacing credentials.
    """

    def __init__(
        self,
        *,
        verify_checkout_use_case: VerifyCheckoutUseCase,
        identity_repository: IdentityRepositoryPort,
        password_hasher: PasswordHasherPort,
        session_codec: SessionCodecPort,
    ):
        self._verify_checkout = verify_checkout_use_case
        self._identity_repository = identity_repository
        self._password_hasher = password_hasher
        self._session_codec = session_codec

    def execute(self, command: ProvisionAccountInput) -> ProvisionAccountOutput:
        if not (command.reference or "").strip():
            raise InvalidInputError("Missing checkout session reference.")
        if not isinstance(command.password, str) or len(command.password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError("Please choose a password with at least 8 characters.")

        checkout = self._verify_checkout.load(command.reference)
        if checkout.mode != "recurring":
            raise CheckoutNotApplicableError("Account creation only applies to subscriptions.")

        outcome = self._verify_checkout.evaluate(checkout)
        if not outcome.identity_id:
            raise MissingCustomerError("Missing customer information for this subscription.")

        identity = outcome.identity
        if identity is None:
            identity = self._identity_repository.get(identity_id=outcome.identity_id)
        if identity is None:
            raise MissingCustomerError("Missing customer information for this subscription.")
        if identity.is_provisioned:
            logger.info("provision_account: already provisioned identity=%s", identity.id)
            raise AccountAlreadyExistsError("An account with this email already exists.")

        self._ensure_email_unclaimed(email=outcome.email, identity_id=identity.id)

        password_hash = self._password_hasher.hash(command.password)

        user_id = identity.user_id or generate_user_id()
        fields = {
            PASSWORD_HASH_KEY: password_hash,
            USER_ID_KEY: user_id,
        }
        if outcome.subscription_id:
            fields[SUBSCRIPTION_ID_KEY] = outcome.subscription_id

        try:
            self._identity_repository.merge_update(
                identity_id=identity.id,
                fields=fields,
                if_absent=PASSWORD_HASH_KEY,
            )
        except AccountAlreadyExistsError:
            logger.info("provision_account: concurrent provisioning detected identity=%s", identity.id)
            raise
        logger.info("provision_account: provisioned identity=%s user_id=%s", identity.id, user_id)

        return ProvisionAccountOutput(
            identity_id=identity.id,
            user_id=user_id,
            session=issue_session(
                session_codec=self._session_codec,
                subject=identity.id,
                email=outcome.email,
            ),
        )

    def _ensure_email_unclaimed(self, *, email: str, identity_id: str) -> None:
        for candidate in self._identity_repository.find_by_email(email=email):
            if candidate.id != identity_id and candidate.is_provisioned:
                logger.info(
                    "provision_account: email already bound identity=%s existing=%s",
                    identity_id,
                    candidate.id,
                )
                raise AccountAlreadyExistsError("An account with this email already exists.")
