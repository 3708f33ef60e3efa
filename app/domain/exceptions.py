from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""

    status_code = 400


class InvalidInputError(DomainError):
    """Parametros ausentes ou invalidos."""


class CheckoutNotFoundError(DomainError):
    """Sessao de checkout nao existe no provedor de cobranca."""

    status_code = 404


class CheckoutIncompleteError(DomainError):
    """Checkout ainda nao foi pago/concluido."""


class CheckoutNotApplicableError(DomainError):
    """Checkout nao e uma assinatura; nao cria conta."""


class MissingEmailError(DomainError):
    """Nao foi possivel resolver o email do assinante."""


class MissingCustomerError(DomainError):
    """Checkout sem cliente vinculado."""


class AccountAlreadyExistsError(DomainError):
    """Cliente ja possui credenciais provisionadas."""

    status_code = 409


class InvalidCredentialsError(DomainError):
    """Email ou senha invalidos."""

    status_code = 401


class SubscriptionInactiveError(DomainError):
    """Assinatura vinculada nao esta ativa."""

    status_code = 403


class UpstreamServiceError(DomainError):
    """Falha ao chamar servico externo."""

    status_code = 502


class ConfigurationError(DomainError):
    """Configuracao obrigatoria ausente."""

    status_code = 500
