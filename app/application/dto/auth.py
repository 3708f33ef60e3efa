from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.session import SessionClaims


@dataclass(frozen=True)
class ProvisionAccountInput:
    reference: str
    password: str


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str


@dataclass(frozen=True)
class IssuedSession:
    token: str
    claims: SessionClaims


@dataclass(frozen=True)
class ProvisionAccountOutput:
    identity_id: str
    user_id: str
    session: IssuedSession


@dataclass(frozen=True)
class LoginOutput:
    identity_id: str
    session: IssuedSession
