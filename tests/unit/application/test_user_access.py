"""
Unit tests for RegisterUser and AuthenticateUser use cases.

Usage:
    pytest tests/unit/application/test_user_access.py
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from comptable.application.use_cases.authenticate_user import AuthenticateUser
from comptable.application.use_cases.register_user import RegisterUser
from comptable.domain.entities.account import Account
from comptable.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    InvalidCredentialsError,
    ValidationError,
)
from comptable.infrastructure.auth.password_hasher import Pbkdf2PasswordHasher


@pytest.fixture
def hasher() -> Pbkdf2PasswordHasher:
    return Pbkdf2PasswordHasher(iterations=1_000)


class TestRegisterUser:
    """Unit tests for RegisterUser use case."""

    async def test_register_stores_hash_not_password(self, hasher):
        account_repo = AsyncMock()
        account_repo.create.side_effect = lambda account: account

        account = await RegisterUser(account_repo, hasher).execute("alice", "secret")

        assert account.login == "alice"
        assert account.current == Decimal("0")
        assert account.password_hash != "secret"
        assert hasher.verify("secret", account.password_hash)

    async def test_duplicate_login_propagates(self, hasher):
        account_repo = AsyncMock()
        account_repo.create.side_effect = DuplicateEntityError("Account", "alice")

        with pytest.raises(DuplicateEntityError):
            await RegisterUser(account_repo, hasher).execute("alice", "secret")

    @pytest.mark.parametrize("login,password", [("", "x"), ("   ", "x"), ("a", "")])
    async def test_empty_credentials_rejected(self, hasher, login, password):
        account_repo = AsyncMock()

        with pytest.raises(ValidationError):
            await RegisterUser(account_repo, hasher).execute(login, password)

        account_repo.create.assert_not_called()


class TestAuthenticateUser:
    """Unit tests for AuthenticateUser use case."""

    async def test_correct_password(self, hasher):
        account_repo = AsyncMock()
        account_repo.get_by_login.return_value = Account(
            login="alice", password_hash=hasher.hash("secret")
        )

        account = await AuthenticateUser(account_repo, hasher).execute(
            "alice", "secret"
        )

        assert account.login == "alice"

    async def test_wrong_password(self, hasher):
        account_repo = AsyncMock()
        account_repo.get_by_login.return_value = Account(
            login="alice", password_hash=hasher.hash("secret")
        )

        with pytest.raises(InvalidCredentialsError):
            await AuthenticateUser(account_repo, hasher).execute("alice", "nope")

    async def test_unknown_login(self, hasher):
        account_repo = AsyncMock()
        account_repo.get_by_login.return_value = None

        with pytest.raises(AuthenticationError) as exc_info:
            await AuthenticateUser(account_repo, hasher).execute("ghost", "secret")

        assert exc_info.value.code == "AUTHENTICATION_ERROR"
