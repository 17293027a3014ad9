"""
Authentication domain exceptions.
"""

from comptable.domain.exceptions.base import ComptableException


class AuthenticationError(ComptableException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTHENTICATION_ERROR")


class InvalidCredentialsError(AuthenticationError):
    """Raised when login/password pair does not match."""

    def __init__(self):
        super().__init__("Invalid login or password")


class NotAuthenticatedError(AuthenticationError):
    """Raised when request carries no valid session."""

    def __init__(self):
        super().__init__("Session is missing or expired")
