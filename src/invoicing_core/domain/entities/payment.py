from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import (
    InvalidPaymentAmountError,
    InvalidPaymentDateError,
)
from invoicing_core.domain.value_objects import ZERO, PaymentId, to_money

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal

    from invoicing_core.domain.entities.invoice import Invoice
    from invoicing_core.domain.value_objects import InvoiceId


@dataclass(frozen=True, slots=True)
class Payment:
    """Payment entity: an amount applied against one invoice's balance.

    A payment references its invoice but does not own it. Payments are
    recorded once and never updated or deleted.

    Use the create() factory method to construct instances with validation.
    """

    id: PaymentId
    invoice_id: InvoiceId
    amount: Decimal
    payment_date: datetime
    created_at: datetime

    @classmethod
    def create(
        cls,
        invoice_id: InvoiceId,
        amount: Decimal | int | str,
        now: datetime,
        payment_date: datetime | None = None,
    ) -> Payment:
        """Factory method to create a Payment with validation.

        Args:
            invoice_id: The invoice this payment applies to.
            amount: Payment amount; rounded to 2 digits before validation.
            now: Timestamp of payment creation (UTC).
            payment_date: When the payment was made; defaults to now.

        Returns:
            A new Payment instance.

        Raises:
            InvalidAmountError: If amount is not a valid money value.
            InvalidPaymentAmountError: If amount <= 0.
            InvalidPaymentDateError: If payment_date is naive or after now.
        """
        money = to_money(amount)
        if money <= ZERO:
            raise InvalidPaymentAmountError(f"Payment amount must be greater than 0, got {money}")

        if payment_date is None:
            payment_date = now
        elif payment_date.tzinfo is None:
            raise InvalidPaymentDateError("Payment date must be timezone-aware")
        elif payment_date > now:
            raise InvalidPaymentDateError(
                f"Payment date cannot be in the future: {payment_date.isoformat()}"
            )

        return cls(
            id=PaymentId.generate(),
            invoice_id=invoice_id,
            amount=money,
            payment_date=payment_date,
            created_at=now,
        )

    def apply_to(self, invoice: Invoice, now: datetime) -> Invoice:
        """Apply this payment, returning the updated invoice.

        State is checked before the balance, so a draft invoice always
        reports InvalidStateTransitionError.
        """
        if invoice.id != self.invoice_id:
            raise ValueError(
                f"Payment {self.id} belongs to invoice {self.invoice_id}, not {invoice.id}"
            )
        return invoice.apply_payment(self.amount, now)
