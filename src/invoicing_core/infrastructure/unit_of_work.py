from __future__ import annotations

from threading import Lock
from typing import TYPE_CHECKING, Any, Protocol

from invoicing_core.application.ports import UnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable


class SupportsSnapshot(Protocol):
    """An in-memory store whose contents can be captured and put back."""

    def snapshot(self) -> Any: ...

    def restore(self, state: Any) -> None: ...


class InMemoryUnitOfWork(UnitOfWork):
    """Transaction boundary over in-memory repositories.

    begin() takes a store-wide lock and snapshots every registered
    repository; rollback() restores the snapshots unless commit() ran
    first. Snapshots are shallow: repositories hold frozen entities and
    replace them on save, so a dict copy is enough.

    Transactions are serialized (one writer or reader at a time), which
    is the in-memory stand-in for SERIALIZABLE isolation. Not reentrant:
    nesting a unit of work inside itself deadlocks.
    """

    def __init__(self, repositories: Iterable[SupportsSnapshot]) -> None:
        self._repositories = list(repositories)
        self._lock = Lock()
        self._snapshots: list[Any] | None = None
        self._active = False

    def begin(self) -> None:
        self._lock.acquire()
        try:
            self._snapshots = [repo.snapshot() for repo in self._repositories]
        except BaseException:
            self._lock.release()
            raise
        self._active = True

    def commit(self) -> None:
        if not self._active:
            raise RuntimeError("commit() called outside of a unit of work")
        self._snapshots = None

    def rollback(self) -> None:
        if not self._active:
            return

        try:
            if self._snapshots is not None:
                for repo, state in zip(self._repositories, self._snapshots, strict=True):
                    repo.restore(state)
        finally:
            self._snapshots = None
            self._active = False
            self._lock.release()
