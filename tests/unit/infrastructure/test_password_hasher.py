"""
Unit tests for Pbkdf2PasswordHasher.

Usage:
    pytest tests/unit/infrastructure/test_password_hasher.py
"""

import pytest

from comptable.infrastructure.auth.password_hasher import Pbkdf2PasswordHasher


@pytest.fixture
def hasher() -> Pbkdf2PasswordHasher:
    return Pbkdf2PasswordHasher(iterations=1_000)


class TestPbkdf2PasswordHasher:
    """Unit tests for password hashing."""

    def test_roundtrip(self, hasher):
        encoded = hasher.hash("correct horse")
        assert encoded.startswith("pbkdf2_sha256$1000$")
        assert hasher.verify("correct horse", encoded)

    def test_wrong_password(self, hasher):
        assert not hasher.verify("wrong", hasher.hash("right"))

    def test_salted(self, hasher):
        assert hasher.hash("same") != hasher.hash("same")

    def test_iterations_read_from_hash(self, hasher):
        encoded = Pbkdf2PasswordHasher(iterations=2_000).hash("pw")
        assert hasher.verify("pw", encoded)

    @pytest.mark.parametrize(
        "encoded", ["", "garbage", "md5$1$salt$hash", "pbkdf2_sha256$x$salt$hash"]
    )
    def test_malformed_hash(self, hasher, encoded):
        assert not hasher.verify("pw", encoded)
