from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Customer
    from invoicing_core.domain.value_objects import CustomerId


class CustomerRepository(ABC):
    """Port for customer persistence.

    Contract:
    - get() and get_by_email() return None when nothing matches
    - save() performs upsert
    - delete() is a no-op for unknown IDs
    - Implementations are NOT thread-safe; callers must ensure serialization
    """

    @abstractmethod
    def get(self, customer_id: CustomerId) -> Customer | None:
        """Retrieve a customer by ID (returns a copy)."""

    @abstractmethod
    def get_by_email(self, email: str) -> Customer | None:
        """Retrieve a customer by email address, ignoring case and surrounding spaces."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a customer (upsert semantics)."""

    @abstractmethod
    def delete(self, customer_id: CustomerId) -> None:
        """Remove a customer."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """All customers ordered by name."""
