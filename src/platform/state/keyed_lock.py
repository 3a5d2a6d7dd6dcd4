"""
Keyed in-process locks

One ``anyio.Lock`` per key (e.g. ``trip:42``), created on first use and
dropped once nobody holds or waits on it. Acquisition is bounded by a
timeout so a caller never waits forever on a busy trip.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Callable, Dict

import anyio

from src.platform.exception.exceptions import CustomBaseError, ServiceBusyError
from src.platform.logging.loguru_io import Logger


class KeyedLockRegistry:
    def __init__(self, *, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        self._locks: Dict[str, anyio.Lock] = {}
        self._users: Dict[str, int] = {}

    def _checkout(self, key: str) -> anyio.Lock:
        # No await between lookup and insert: one lock per key
        lock = self._locks.get(key)
        if lock is None:
            lock = anyio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1
        return lock

    def _checkin(self, key: str) -> None:
        remaining = self._users[key] - 1
        if remaining:
            self._users[key] = remaining
        else:
            del self._users[key]
            del self._locks[key]

    @asynccontextmanager
    async def hold(
        self, key: str, *, on_timeout: Callable[[], CustomBaseError] | None = None
    ) -> AsyncIterator[None]:
        """
        Raises:
            ``on_timeout()`` (default ServiceBusyError) when the lock stays busy
            longer than ``timeout_seconds``
        """
        lock = self._checkout(key)
        try:
            try:
                with anyio.fail_after(self.timeout_seconds):
                    await lock.acquire()
            except TimeoutError:
                Logger.base.warning(
                    f'⏳ [LOCK] Gave up on {key} after {self.timeout_seconds}s (still held)'
                )
                raise on_timeout() if on_timeout else ServiceBusyError(
                    f'{key} is busy, please retry'
                )

            Logger.base.debug(f'🔒 [LOCK] Acquired {key}')
            try:
                yield
            finally:
                lock.release()
                Logger.base.debug(f'🔓 [LOCK] Released {key}')
        finally:
            self._checkin(key)

    def is_locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return bool(lock and lock.locked())

    def __len__(self) -> int:
        """Keys currently held or waited on"""
        return len(self._locks)
