"""
In-memory session store.

Maps opaque session tokens to logins with an expiry. Lookups are O(1);
an expired session is dropped when it is read.
"""

import asyncio
import secrets
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Optional


class ReadWriteLock:
    """
    Asyncio reader/writer lock.

    Any number of readers may hold the lock together; a writer holds it
    alone. Waiting writers block new readers so writes are not starved.
    """

    def __init__(self):
        self._condition = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._condition:
            await self._condition.wait_for(
                lambda: not self._writer and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._condition:
            self._writers_waiting += 1
            try:
                await self._condition.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            async with self._condition:
                self._writer = False
                self._condition.notify_all()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def locked_for_write(self) -> bool:
        return self._writer


@dataclass(frozen=True)
class Session:
    """A logged-in principal and when its session ends."""

    login: str
    expires_at: float


class SessionStore:
    """
    Token to login mapping with expiry.

    Business rules:
    - Tokens are random and unguessable
    - A session is valid until ttl_seconds after creation
    - Reads proceed in parallel, writes are exclusive
    """

    def __init__(
        self,
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize session store.

        Args:
            ttl_seconds: Session lifetime
            clock: Monotonic time source
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = ReadWriteLock()

    async def create(self, login: str) -> str:
        """
        Open a session for login.

        Args:
            login: Authenticated login

        Returns:
            New session token
        """
        token = secrets.token_urlsafe(32)
        session = Session(login=login, expires_at=self._clock() + self.ttl_seconds)
        async with self._lock.write():
            self._sessions[token] = session
        return token

    async def resolve(self, token: str) -> Optional[str]:
        """
        Look up the login behind a token.

        Args:
            token: Session token from cookie

        Returns:
            Login if session exists and has not expired, None otherwise
        """
        async with self._lock.read():
            session = self._sessions.get(token)

        if session is None:
            return None

        if session.expires_at > self._clock():
            return session.login

        async with self._lock.write():
            # Another reader may have replaced or removed it meanwhile
            if self._sessions.get(token) is session:
                del self._sessions[token]
        return None

    async def revoke(self, token: str) -> None:
        async with self._lock.write():
            self._sessions.pop(token, None)

    async def purge_expired(self) -> int:
        """
        Drop all expired sessions.

        Returns:
            Number of sessions removed
        """
        now = self._clock()
        async with self._lock.write():
            expired = [
                token
                for token, session in self._sessions.items()
                if session.expires_at <= now
            ]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
