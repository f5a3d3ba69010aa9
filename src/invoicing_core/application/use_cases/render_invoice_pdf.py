from __future__ import annotations

from typing import TYPE_CHECKING

from invoicing_core.application.services import InvoiceBalanceService
from invoicing_core.domain.exceptions import CustomerNotFoundError, InvoiceNotFoundError

if TYPE_CHECKING:
    from invoicing_core.application.ports import (
        CustomerRepository,
        InvoicePdfRenderer,
        InvoiceRepository,
        PaymentRepository,
        UnitOfWork,
    )
    from invoicing_core.domain.value_objects import InvoiceId


class RenderInvoicePdfUseCase:
    """Renders the PDF for any invoice, whatever its status.

    The invoice is reconciled first so the document shows the current
    balance. Nothing is persisted.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        customer_repository: CustomerRepository,
        invoice_repository: InvoiceRepository,
        payment_repository: PaymentRepository,
        pdf_renderer: InvoicePdfRenderer,
    ) -> None:
        self._uow = unit_of_work
        self._customer_repo = customer_repository
        self._invoice_repo = invoice_repository
        self._balance = InvoiceBalanceService(payment_repository)
        self._pdf_renderer = pdf_renderer

    def execute(self, invoice_id: InvoiceId) -> bytes:
        """Raises InvoiceNotFoundError or CustomerNotFoundError."""
        with self._uow:
            invoice = self._invoice_repo.get(invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(invoice_id)

            customer = self._customer_repo.get(invoice.customer_id)
            if customer is None:
                raise CustomerNotFoundError(invoice.customer_id)

            invoice = self._balance.refresh(invoice)

        return self._pdf_renderer.render(invoice, customer)
