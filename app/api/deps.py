from __future__ import annotations

import logging
from functools import lru_cache

import stripe
from fastapi import Cookie, Depends, HTTPException

from app.api.cookies import SESSION_COOKIE_NAME
from app.application.dto.access import AccessContext
from app.application.use_cases.check_access import CheckAccessUseCase
from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.login import LoginUseCase
from app.application.use_cases.optimize_prompt import OptimizePromptUseCase
from app.application.use_cases.provision_account import ProvisionAccountUseCase
from app.application.use_cases.verify_checkout import VerifyCheckoutUseCase
from app.infrastructure.clients.mistral_client import MistralClient
from app.infrastructure.clients.stripe_client import StripeClient, build_stripe_client
from app.infrastructure.repositories.stripe_identity_repository import StripeIdentityRepository
from app.infrastructure.security.password_hasher import PasswordHasher
from app.infrastructure.security.session_codec import JwtSessionCodec
from app.shared.config import Settings, get_settings


logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
INACTIVE_LOGIN_PATH = "/login?status=inactive"
CONFIGURATION_NOT_READY = "Service configuration not ready."


def get_app_settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def _get_stripe_sdk_client() -> stripe.StripeClient:
    settings = get_settings()
    if not settings.stripe_secret_key:
        logger.error("deps: STRIPE_SECRET_KEY is not configured")
        raise HTTPException(status_code=500, detail=CONFIGURATION_NOT_READY)
    return build_stripe_client(
        secret_key=settings.stripe_secret_key,
        api_version=settings.stripe_api_version,
    )


def _get_billing_client() -> StripeClient:
    return StripeClient(client=_get_stripe_sdk_client())


def _get_identity_repository() -> StripeIdentityRepository:
    return StripeIdentityRepository(client=_get_stripe_sdk_client())


@lru_cache(maxsize=1)
def _get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


@lru_cache(maxsize=1)
def _get_session_codec() -> JwtSessionCodec:
    settings = get_settings()
    if not settings.jwt_secret:
        logger.error("deps: JWT_SECRET is not configured")
        raise HTTPException(status_code=500, detail=CONFIGURATION_NOT_READY)
    return JwtSessionCodec(jwt_secret=settings.jwt_secret)


def _get_prompt_optimizer() -> MistralClient:
    settings = get_settings()
    if not settings.mistral_api_key:
        logger.error("deps: MISTRAL_API_KEY is not configured")
        raise HTTPException(status_code=500, detail=CONFIGURATION_NOT_READY)
    return MistralClient(
        api_key=settings.mistral_api_key,
        api_base=settings.mistral_api_base,
        model=settings.mistral_model,
        timeout_seconds=settings.mistral_timeout_seconds,
    )


def get_verify_checkout_use_case() -> VerifyCheckoutUseCase:
    return VerifyCheckoutUseCase(
        billing_port=_get_billing_client(),
        identity_repository=_get_identity_repository(),
    )


def get_provision_account_use_case() -> ProvisionAccountUseCase:
    return ProvisionAccountUseCase(
        verify_checkout_use_case=get_verify_checkout_use_case(),
        identity_repository=_get_identity_repository(),
        password_hasher=_get_password_hasher(),
        session_codec=_get_session_codec(),
    )


def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(
        identity_repository=_get_identity_repository(),
        billing_port=_get_billing_client(),
        password_hasher=_get_password_hasher(),
        session_codec=_get_session_codec(),
    )


def get_check_access_use_case() -> CheckAccessUseCase:
    return CheckAccessUseCase(
        session_codec=_get_session_codec(),
        identity_repository=_get_identity_repository(),
        billing_port=_get_billing_client(),
    )


def get_create_checkout_session_use_case() -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(billing_port=_get_billing_client())


def get_optimize_prompt_use_case() -> OptimizePromptUseCase:
    return OptimizePromptUseCase(prompt_optimizer=_get_prompt_optimizer())


def require_active_session(
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    use_case: CheckAccessUseCase = Depends(get_check_access_use_case),
) -> AccessContext:
    decision = use_case.execute(token=session_token)
    if decision.context is None:
        location = INACTIVE_LOGIN_PATH if decision.reason == "inactive_subscription" else LOGIN_PATH
        raise HTTPException(status_code=303, detail="Sign in required.", headers={"Location": location})
    return decision.context
