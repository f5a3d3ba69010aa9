from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Invoice, InvoiceStatus
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId


class InvoiceRepository(ABC):
    """Port for invoice persistence.

    Contract:
    - get() returns None if invoice does not exist (no exception)
    - save() performs upsert: creates if new, updates if exists
    - The stored balance is a cache; readers recompute it from payments
    - Implementations are NOT thread-safe; callers must ensure serialization
    """

    @abstractmethod
    def get(self, invoice_id: InvoiceId) -> Invoice | None:
        """Retrieve an invoice by ID.

        Returns:
            The Invoice entity if found, None otherwise.
            Returned entity is a copy; mutations do not affect stored state.
        """

    @abstractmethod
    def save(self, invoice: Invoice) -> None:
        """Persist an invoice (upsert semantics)."""

    @abstractmethod
    def list_all(
        self,
        status: InvoiceStatus | None = None,
        customer_id: CustomerId | None = None,
    ) -> list[Invoice]:
        """Invoices matching the optional filters, newest first."""

    @abstractmethod
    def exists_for_customer(self, customer_id: CustomerId) -> bool:
        """True if any invoice references the customer."""
