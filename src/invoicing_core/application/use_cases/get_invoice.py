from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from invoicing_core.application.services import InvoiceBalanceService
from invoicing_core.domain.exceptions import InvoiceNotFoundError

if TYPE_CHECKING:
    from invoicing_core.application.ports import (
        InvoiceRepository,
        PaymentRepository,
        UnitOfWork,
    )
    from invoicing_core.domain.entities import Invoice, InvoiceStatus
    from invoicing_core.domain.value_objects import CustomerId, InvoiceId


@dataclass(frozen=True, slots=True)
class ListInvoicesRequest:
    """Optional filters for listing invoices."""

    status: InvoiceStatus | None = None
    customer_id: CustomerId | None = None


class GetInvoiceUseCase:
    """Loads one invoice with its balance recomputed from payments.

    Read-only: the recomputed balance is returned, not written back, so
    two calls without an intervening payment return identical values.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        invoice_repository: InvoiceRepository,
        payment_repository: PaymentRepository,
    ) -> None:
        self._uow = unit_of_work
        self._invoice_repo = invoice_repository
        self._balance = InvoiceBalanceService(payment_repository)

    def execute(self, invoice_id: InvoiceId) -> Invoice:
        """Raises InvoiceNotFoundError if the invoice does not exist."""
        with self._uow:
            invoice = self._invoice_repo.get(invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(invoice_id)
            return self._balance.refresh(invoice)


class ListInvoicesUseCase:
    """Lists invoices, newest first, each with a freshly computed balance."""

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        invoice_repository: InvoiceRepository,
        payment_repository: PaymentRepository,
    ) -> None:
        self._uow = unit_of_work
        self._invoice_repo = invoice_repository
        self._balance = InvoiceBalanceService(payment_repository)

    def execute(self, request: ListInvoicesRequest | None = None) -> list[Invoice]:
        request = request or ListInvoicesRequest()
        with self._uow:
            invoices = self._invoice_repo.list_all(customer_id=request.customer_id)
            refreshed = [self._balance.refresh(invoice) for invoice in invoices]

        # Filter on the reconciled status; a paid-up SENT row reads as PAID
        if request.status is None:
            return refreshed
        return [invoice for invoice in refreshed if invoice.status == request.status]
