"""
Register User use case.
"""

from comptable.domain.entities.account import Account
from comptable.domain.exceptions import ValidationError
from comptable.domain.repositories.i_account_repository import IAccountRepository
from comptable.domain.services.i_password_hasher import IPasswordHasher


class RegisterUser:
    """
    Create an account for a new login.

    Business rules:
    - Login and password must be non-empty
    - Login must not be taken (DuplicateEntityError otherwise)
    - New accounts start with zero balance
    - Password is stored hashed only
    """

    def __init__(
        self,
        account_repository: IAccountRepository,
        password_hasher: IPasswordHasher,
    ):
        """
        Initialize use case with dependencies.

        Args:
            account_repository: Repository for account persistence
            password_hasher: One-way password hasher
        """
        self.account_repository = account_repository
        self.password_hasher = password_hasher

    async def execute(self, login: str, password: str) -> Account:
        """
        Execute registration.

        Args:
            login: Desired login
            password: Plain-text password

        Returns:
            Created Account entity

        Raises:
            ValidationError: If login or password is empty
            DuplicateEntityError: If login already exists
        """
        if not login or not login.strip():
            raise ValidationError("login", "must not be empty")
        if not password:
            raise ValidationError("password", "must not be empty")

        account = Account(
            login=login,
            password_hash=self.password_hasher.hash(password),
        )
        return await self.account_repository.create(account)
