from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from invoicing_core.application.ports import InvoiceRepository

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Invoice, InvoiceStatus
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId


class InMemoryInvoiceRepository(InvoiceRepository):
    """In-memory invoice repository for development and testing.

    Copy-on-read and copy-on-write, like a detached ORM entity: an
    invoice changed without save() is never visible to the next reader.
    NOT thread-safe; relies on external LockProvider / UnitOfWork.
    """

    def __init__(self) -> None:
        self._invoices: dict[InvoiceId, Invoice] = {}

    def get(self, invoice_id: InvoiceId) -> Invoice | None:
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            return None
        return copy.deepcopy(invoice)

    def save(self, invoice: Invoice) -> None:
        self._invoices[invoice.id] = copy.deepcopy(invoice)

    def list_all(
        self,
        status: InvoiceStatus | None = None,
        customer_id: CustomerId | None = None,
    ) -> list[Invoice]:
        matches = [
            invoice
            for invoice in self._invoices.values()
            if (status is None or invoice.status == status)
            and (customer_id is None or invoice.customer_id == customer_id)
        ]
        matches.sort(key=lambda invoice: invoice.created_at, reverse=True)
        return copy.deepcopy(matches)

    def exists_for_customer(self, customer_id: CustomerId) -> bool:
        return any(invoice.customer_id == customer_id for invoice in self._invoices.values())

    def snapshot(self) -> dict[InvoiceId, Invoice]:
        return dict(self._invoices)

    def restore(self, state: dict[InvoiceId, Invoice]) -> None:
        self._invoices = dict(state)
