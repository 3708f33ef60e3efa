from __future__ import annotations

from app.infrastructure.security.password_hasher import BCRYPT_ROUNDS, PasswordHasher


def test_password_hasher_uses_salted_bcrypt_and_verifies():
    hasher = PasswordHasher(rounds=4)

    first = hasher.hash("longenough1")
    second = hasher.hash("longenough1")

    assert first.startswith("$2")
    assert first != second
    assert "longenough1" not in first
    assert hasher.verify("longenough1", first)
    assert not hasher.verify("wrongpassword", first)


def test_password_hasher_rejects_malformed_hash():
    assert PasswordHasher(rounds=4).verify("longenough1", "not-a-hash") is False


def test_default_cost_factor_is_twelve():
    assert BCRYPT_ROUNDS == 12
    assert "$12$" in PasswordHasher().hash("longenough1")
