"""
Password hasher interface.
"""

from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """Interface for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return an encoded hash for storage."""

    @abstractmethod
    def verify(self, password: str, encoded: str) -> bool:
        """Check password against a stored hash."""
