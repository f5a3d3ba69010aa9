from __future__ import annotations

from typing import TYPE_CHECKING

from invoicing_core.domain.value_objects import ZERO, round2

if TYPE_CHECKING:
    from decimal import Decimal

    from invoicing_core.application.ports import PaymentRepository
    from invoicing_core.domain.entities import Invoice
    from invoicing_core.domain.value_objects import InvoiceId


class InvoiceBalanceService:
    """Recomputes invoice balances from the payment ledger.

    The balance stored with an invoice is a cache. Every read that shows a
    balance and every payment validation goes through refresh(), which
    folds over all persisted payments for the invoice:

        balance = round2(total_amount - sum(payment.amount))

    Must be called inside the same lock/unit of work as any write that
    depends on the result.
    """

    def __init__(self, payment_repository: PaymentRepository) -> None:
        self._payment_repo = payment_repository

    def amount_paid(self, invoice_id: InvoiceId) -> Decimal:
        payments = self._payment_repo.list_for_invoice(invoice_id)
        return round2(sum((payment.amount for payment in payments), ZERO))

    def refresh(self, invoice: Invoice) -> Invoice:
        """Return the invoice with its balance recomputed from payments.

        Raises:
            LedgerInconsistencyError: If recorded payments exceed the total.
        """
        return invoice.reconcile(self.amount_paid(invoice.id))
