from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from app.domain.exceptions import ConfigurationError


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    app_env: str
    jwt_secret: str
    stripe_secret_key: str
    stripe_api_version: str
    stripe_success_url: str
    stripe_cancel_url: str
    mistral_api_key: str
    mistral_api_base: str
    mistral_model: str
    mistral_timeout_seconds: float

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


REQUIRED_SETTINGS = {
    "jwt_secret": "JWT_SECRET",
    "stripe_secret_key": "STRIPE_SECRET_KEY",
}


def get_settings() -> Settings:
    return Settings(
        app_env=_env("APP_ENV", "development"),
        jwt_secret=_env("JWT_SECRET", ""),
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_api_version=_env("STRIPE_API_VERSION", "2023-10-16"),
        stripe_success_url=_env("STRIPE_SUCCESS_URL", "http://localhost:3000/success"),
        stripe_cancel_url=_env("STRIPE_CANCEL_URL", "http://localhost:3000/products"),
        mistral_api_key=_env("MISTRAL_API_KEY", ""),
        mistral_api_base=_env("MISTRAL_API_BASE", "https://api.mistral.ai/v1"),
        mistral_model=_env("MISTRAL_MODEL", "mistral-large-latest"),
        mistral_timeout_seconds=float(_env("MISTRAL_TIMEOUT_SECONDS", "30")),
    )


def validate_settings(settings: Settings) -> Settings:
    missing = [env_name for field_name, env_name in REQUIRED_SETTINGS.items() if not getattr(settings, field_name)]
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}.")
    return settings
