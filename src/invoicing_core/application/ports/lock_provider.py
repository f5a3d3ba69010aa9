from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import ExitStack, contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class LockProvider(ABC):
    """Port for resource-level locking.

    Contract:
    - acquire() MUST serialize access to the same resource_id
    - acquire() MUST release the lock when the context exits (normal or exception)
    - acquire() MUST be blocking (waits until lock is available)
    - Different resource_ids MAY be acquired concurrently

    Concurrent payments against one invoice rely on this: the balance
    recomputed inside the lock reflects every payment already committed.
    """

    @abstractmethod
    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        """Acquire a lock for the given resource ID.

        Args:
            resource_id: Canonical string identifier for the resource,
                         e.g. "invoice:<uuid>" or "customer-email:<email>".

        Yields:
            None. The lock is held for the duration of the context.
        """
        ...

    @contextmanager
    def acquire_all(self, resource_ids: Iterable[str]) -> Iterator[None]:
        """Hold locks on several resources at once.

        Locks are taken in sorted order, so two callers asking for the same
        set can never deadlock. Duplicates are acquired once.
        """
        with ExitStack() as stack:
            for resource_id in sorted(set(resource_ids)):
                stack.enter_context(self.acquire(resource_id))
            yield


def invoice_lock_key(invoice_id: object) -> str:
    return f"invoice:{invoice_id}"


def customer_lock_key(customer_id: object) -> str:
    return f"customer:{customer_id}"


def customer_email_lock_key(email: str) -> str:
    return f"customer-email:{email.strip().lower()}"
