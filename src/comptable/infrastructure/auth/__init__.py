"""Authentication infrastructure."""

from comptable.infrastructure.auth.password_hasher import Pbkdf2PasswordHasher
from comptable.infrastructure.auth.session_store import (
    ReadWriteLock,
    Session,
    SessionStore,
)

__all__ = [
    "Pbkdf2PasswordHasher",
    "ReadWriteLock",
    "Session",
    "SessionStore",
]
