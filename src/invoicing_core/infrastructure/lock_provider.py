from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import LockProvider

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = structlog.get_logger(__name__)


class InMemoryLockProvider(LockProvider):
    """Per-resource locks held in process memory.

    A registry lock guards lookup/creation of the resource lock; the
    resource lock itself is held for the caller's critical section, so
    different invoices or customers never wait on each other.

    With a timeout, a caller that cannot get the lock in time gets a
    TimeoutError instead of blocking forever.

    Single process only; locks are never evicted.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout
        self._locks: dict[str, Lock] = {}
        self._registry_lock = Lock()

    def _lock_for(self, resource_id: str) -> Lock:
        with self._registry_lock:
            return self._locks.setdefault(resource_id, Lock())

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        lock = self._lock_for(resource_id)

        acquired = lock.acquire(timeout=-1 if self._timeout is None else self._timeout)
        if not acquired:
            logger.warning("lock_timeout", resource_id=resource_id, timeout=self._timeout)
            raise TimeoutError(f"Timed out waiting for lock on {resource_id}")

        try:
            yield
        finally:
            lock.release()


class NoOpLockProvider(LockProvider):
    """Lock provider that never blocks.

    For single-threaded unit tests only; concurrency tests need
    InMemoryLockProvider.
    """

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:  # noqa: ARG002
        yield
