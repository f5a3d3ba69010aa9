from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from invoicing_core.application.ports import PaymentRepository
from invoicing_core.domain.exceptions import DuplicatePaymentError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from invoicing_core.domain.entities import Payment
    from invoicing_core.domain.value_objects import InvoiceId, PaymentId


class InMemoryPaymentRepository(PaymentRepository):
    """In-memory payment repository for development and testing.

    Payments are keyed by PaymentId and copied on the way in and out.
    Insert-only: a second save() with the same ID raises. Listings sort
    by payment date, then creation time, newest first.
    """

    def __init__(self) -> None:
        self._payments: dict[PaymentId, Payment] = {}

    def get(self, payment_id: PaymentId) -> Payment | None:
        payment = self._payments.get(payment_id)
        if payment is None:
            return None
        return copy.deepcopy(payment)

    def save(self, payment: Payment) -> None:
        if payment.id in self._payments:
            raise DuplicatePaymentError(f"Payment already recorded: {payment.id}")
        self._payments[payment.id] = copy.deepcopy(payment)

    def list_for_invoice(self, invoice_id: InvoiceId) -> list[Payment]:
        return self._sorted(p for p in self._payments.values() if p.invoice_id == invoice_id)

    def list_all(self) -> list[Payment]:
        return self._sorted(self._payments.values())

    def snapshot(self) -> dict[PaymentId, Payment]:
        return dict(self._payments)

    def restore(self, state: dict[PaymentId, Payment]) -> None:
        self._payments = dict(state)

    @staticmethod
    def _sorted(payments: Iterable[Payment]) -> list[Payment]:
        ordered = sorted(payments, key=lambda p: (p.payment_date, p.created_at), reverse=True)
        return [copy.deepcopy(p) for p in ordered]
