"""
Unit tests for SessionStore and ReadWriteLock.

Usage:
    pytest tests/unit/infrastructure/test_session_store.py
"""

import asyncio

from comptable.infrastructure.auth.session_store import ReadWriteLock, SessionStore


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestSessionStore:
    """Unit tests for SessionStore."""

    async def test_create_and_resolve(self):
        store = SessionStore(ttl_seconds=60, clock=FakeClock())

        token = await store.create("alice")

        assert await store.resolve(token) == "alice"

    async def test_tokens_are_unique(self):
        store = SessionStore()
        tokens = {await store.create("alice") for _ in range(50)}
        assert len(tokens) == 50

    async def test_unknown_token(self):
        store = SessionStore()
        assert await store.resolve("nope") is None

    async def test_expired_session_removed_on_read(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        token = await store.create("alice")

        clock.now = 60

        assert await store.resolve(token) is None
        assert len(store) == 0

    async def test_session_valid_until_expiry(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        token = await store.create("alice")

        clock.now = 59.9

        assert await store.resolve(token) == "alice"

    async def test_revoke(self):
        store = SessionStore()
        token = await store.create("alice")

        await store.revoke(token)

        assert await store.resolve(token) is None

    async def test_purge_expired(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=10, clock=clock)
        await store.create("alice")
        clock.now = 5
        fresh = await store.create("bob")
        clock.now = 12

        assert await store.purge_expired() == 1
        assert len(store) == 1
        assert await store.resolve(fresh) == "bob"


class TestReadWriteLock:
    """Unit tests for ReadWriteLock."""

    async def test_readers_share(self):
        lock = ReadWriteLock()
        both_inside = asyncio.Event()
        inside = 0

        async def reader():
            nonlocal inside
            async with lock.read():
                inside += 1
                if inside == 2:
                    both_inside.set()
                await asyncio.wait_for(both_inside.wait(), timeout=1)

        await asyncio.gather(reader(), reader())
        assert lock.readers == 0

    async def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        order = []

        async with lock.write():
            assert lock.locked_for_write

            async def reader():
                async with lock.read():
                    order.append("read")

            task = asyncio.create_task(reader())
            await asyncio.sleep(0.01)
            assert order == []
            order.append("write done")

        await asyncio.wait_for(task, timeout=1)
        assert order == ["write done", "read"]

    async def test_waiting_writer_blocks_new_readers(self):
        lock = ReadWriteLock()
        order = []
        release_first = asyncio.Event()

        async def first_reader():
            async with lock.read():
                await release_first.wait()
                order.append("first read")

        async def writer():
            async with lock.write():
                order.append("write")

        async def late_reader():
            async with lock.read():
                order.append("late read")

        t1 = asyncio.create_task(first_reader())
        await asyncio.sleep(0.01)
        t2 = asyncio.create_task(writer())
        await asyncio.sleep(0.01)
        t3 = asyncio.create_task(late_reader())
        await asyncio.sleep(0.01)
        release_first.set()

        await asyncio.wait_for(asyncio.gather(t1, t2, t3), timeout=1)
        assert order == ["first read", "write", "late read"]
