from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Payment
    from invoicing_core.domain.value_objects import InvoiceId, PaymentId


class PaymentRepository(ABC):
    """Port for payment persistence.

    Contract:
    - get() returns None if payment does not exist (no exception)
    - save() is insert-only: payments are immutable once recorded
    - list_for_invoice() returns EVERY committed payment for the invoice;
      it is the ledger the balance is recomputed from
    - Calls happen inside an open UnitOfWork, which serializes access
    """

    @abstractmethod
    def get(self, payment_id: PaymentId) -> Payment | None:
        """Retrieve a payment by ID.

        Returns:
            The Payment entity if found, None otherwise.
            Returned entity is a copy; mutations do not affect stored state.
        """

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """Persist a new payment.

        Raises:
            DuplicatePaymentError: If a payment with the same ID exists.
                This is an invariant violation; payments are never updated.
        """

    @abstractmethod
    def list_for_invoice(self, invoice_id: InvoiceId) -> list[Payment]:
        """All payments recorded against an invoice, newest payment date first."""

    @abstractmethod
    def list_all(self) -> list[Payment]:
        """All payments, newest payment date first."""
