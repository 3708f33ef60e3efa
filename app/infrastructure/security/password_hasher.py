from __future__ import annotations

from passlib.context import CryptContext

from app.application.ports.password_hasher_port import PasswordHasherPort


BCRYPT_ROUNDS = 12


class PasswordHasher(PasswordHasherPort):
    """bcrypt hashes stored in customer metadata.

    A malformed stored value counts as a mismatch, never an error.
    """

    def __init__(self, *, rounds: int = BCRYPT_ROUNDS):
        self._ctx = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plain_password: str) -> str:
        return self._ctx.hash(plain_password)

    def verify(self, plain_password: str, password_hash: str) -> bool:
        try:
            return self._ctx.verify(plain_password, password_hash)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        self._ctx.dummy_verify()
