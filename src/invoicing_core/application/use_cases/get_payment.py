from __future__ import annotations

from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import InvoiceNotFoundError, PaymentNotFoundError

if TYPE_CHECKING:
    from invoicing_core.application.ports import (
        InvoiceRepository,
        PaymentRepository,
        UnitOfWork,
    )
    from invoicing_core.domain.entities import Payment
    from invoicing_core.domain.value_objects import InvoiceId, PaymentId


class GetPaymentUseCase:
    def __init__(self, unit_of_work: UnitOfWork, payment_repository: PaymentRepository) -> None:
        self._uow = unit_of_work
        self._payment_repo = payment_repository

    def execute(self, payment_id: PaymentId) -> Payment:
        """Raises PaymentNotFoundError if the payment does not exist."""
        with self._uow:
            payment = self._payment_repo.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment


class ListPaymentsUseCase:
    """Lists payments newest first, for one invoice or across all invoices."""

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        invoice_repository: InvoiceRepository,
        payment_repository: PaymentRepository,
    ) -> None:
        self._uow = unit_of_work
        self._invoice_repo = invoice_repository
        self._payment_repo = payment_repository

    def execute(self, invoice_id: InvoiceId | None = None) -> list[Payment]:
        """Raises InvoiceNotFoundError when filtering by an unknown invoice."""
        with self._uow:
            if invoice_id is None:
                return self._payment_repo.list_all()

            if self._invoice_repo.get(invoice_id) is None:
                raise InvoiceNotFoundError(invoice_id)
            return self._payment_repo.list_for_invoice(invoice_id)
