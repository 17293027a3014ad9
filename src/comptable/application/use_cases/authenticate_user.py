"""
Authenticate User use case.
"""

from comptable.domain.entities.account import Account
from comptable.domain.exceptions import InvalidCredentialsError
from comptable.domain.repositories.i_account_repository import IAccountRepository
from comptable.domain.services.i_password_hasher import IPasswordHasher


class AuthenticateUser:
    """
    Check a login/password pair.

    Unknown login and wrong password are reported identically.
    """

    def __init__(
        self,
        account_repository: IAccountRepository,
        password_hasher: IPasswordHasher,
    ):
        self.account_repository = account_repository
        self.password_hasher = password_hasher

    async def execute(self, login: str, password: str) -> Account:
        """
        Execute authentication.

        Args:
            login: Account login
            password: Plain-text password

        Returns:
            Authenticated Account entity

        Raises:
            InvalidCredentialsError: If login unknown or password wrong
        """
        account = await self.account_repository.get_by_login(login)
        if account is None:
            raise InvalidCredentialsError()

        if not self.password_hasher.verify(password, account.password_hash):
            raise InvalidCredentialsError()

        return account
