"""Invoice aggregate root with state machine behavior.

State machine:
    - draft → sent (mark_as_sent, guarded by send_blockers())
    - sent → paid (apply_payment / reconcile, when the balance reaches zero)
    - paid is terminal (no further transitions)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import (
    InvalidLineItemsError,
    InvalidPaymentAmountError,
    InvalidStateTransitionError,
    InvoiceNotEditableError,
    LedgerInconsistencyError,
    PaymentExceedsBalanceError,
)
from invoicing_core.domain.value_objects import ZERO, InvoiceId, round2

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from decimal import Decimal

    from invoicing_core.domain.value_objects import CustomerId, LineItem


class InvoiceStatus(Enum):
    """Invoice lifecycle states."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


@dataclass(frozen=True, slots=True)
class Invoice:
    """Invoice aggregate root.

    The invoice owns its line items, derives total_amount from them and
    tracks the outstanding balance. It is immutable (frozen dataclass);
    every state-changing method returns a new Invoice with updated_at
    refreshed.

    Invariants:
        - 0 <= balance <= total_amount
        - line items and total change only while status is DRAFT
        - once issued (SENT or PAID): balance == 0 if and only if status is PAID
    """

    id: InvoiceId
    customer_id: CustomerId
    status: InvoiceStatus
    line_items: tuple[LineItem, ...]
    total_amount: Decimal
    balance: Decimal
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        customer_id: CustomerId,
        line_items: Iterable[LineItem],
        now: datetime,
    ) -> Invoice:
        """Create a new DRAFT invoice.

        A new invoice has no payments, so its balance equals its total.
        The line item collection may be empty while the invoice is a draft.
        """
        items = tuple(line_items)
        total = cls.calculate_total(items)
        return cls(
            id=InvoiceId.generate(),
            customer_id=customer_id,
            status=InvoiceStatus.DRAFT,
            line_items=items,
            total_amount=total,
            balance=total,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def calculate_total(line_items: Iterable[LineItem]) -> Decimal:
        """Sum of line item subtotals, rounded to 2 digits."""
        return round2(sum((item.subtotal for item in line_items), ZERO))

    @property
    def number(self) -> str:
        """Human-facing invoice number, e.g. INV-550E8400."""
        return f"INV-{self.id.value.hex[:8].upper()}"

    # -------------------------------------------------------------------------
    # Editing (draft only)
    # -------------------------------------------------------------------------

    def can_be_edited(self) -> bool:
        return self.status == InvoiceStatus.DRAFT

    def add_line_item(self, item: LineItem, now: datetime) -> Invoice:
        """Append a line item and recalculate the total.

        Raises:
            InvoiceNotEditableError: If not in DRAFT state.
        """
        self._ensure_editable()
        return self._with_line_items((*self.line_items, item), now)

    def replace_line_items(self, line_items: Iterable[LineItem], now: datetime) -> Invoice:
        """Replace the whole line item collection and recalculate the total.

        Raises:
            InvoiceNotEditableError: If not in DRAFT state.
            InvalidLineItemsError: If the new collection is empty.
        """
        self._ensure_editable()

        items = tuple(line_items)
        if not items:
            raise InvalidLineItemsError("Invoice must have at least one line item")

        return self._with_line_items(items, now)

    def _ensure_editable(self) -> None:
        if not self.can_be_edited():
            raise InvoiceNotEditableError(self.id, self.status.value)

    def _with_line_items(self, items: tuple[LineItem, ...], now: datetime) -> Invoice:
        total = self.calculate_total(items)
        return replace(
            self,
            line_items=items,
            total_amount=total,
            balance=total,
            updated_at=now,
        )

    # -------------------------------------------------------------------------
    # Sending
    # -------------------------------------------------------------------------

    def send_blockers(self) -> list[str]:
        """Names of the send conditions that do not hold.

        Conditions: status is DRAFT, at least one line item, total > 0.
        """
        blockers = []
        if self.status != InvoiceStatus.DRAFT:
            blockers.append("status")
        if not self.line_items:
            blockers.append("line_items")
        if self.total_amount <= ZERO:
            blockers.append("total_amount")
        return blockers

    def can_be_marked_as_sent(self) -> bool:
        return not self.send_blockers()

    def mark_as_sent(self, now: datetime) -> Invoice:
        """Transition DRAFT → SENT.

        Raises:
            InvalidStateTransitionError: If any send condition fails. The
                error's failed_conditions lists which ones.
        """
        blockers = self.send_blockers()
        if blockers:
            raise InvalidStateTransitionError(
                f"Invoice {self.id} cannot be marked as {InvoiceStatus.SENT.value}; "
                f"failed conditions: {', '.join(blockers)} "
                f"(status={self.status.value}, line_items={len(self.line_items)}, "
                f"total_amount={self.total_amount})",
                failed_conditions=blockers,
            )

        return replace(self, status=InvoiceStatus.SENT, updated_at=now)

    # -------------------------------------------------------------------------
    # Balance and payments
    # -------------------------------------------------------------------------

    def reconcile(self, amount_paid: Decimal) -> Invoice:
        """Recompute the balance from the total amount paid so far.

        The stored balance is a cache; this is the authoritative value.
        A SENT invoice whose payments cover the total is moved to PAID.
        updated_at is left untouched so repeated reads are identical.

        Raises:
            LedgerInconsistencyError: If payments exceed the total.
        """
        balance = round2(self.total_amount - amount_paid)
        if balance < ZERO:
            raise LedgerInconsistencyError(
                f"Payments ({round2(amount_paid)}) exceed total ({self.total_amount}) "
                f"for invoice {self.id}"
            )

        status = self.status
        if status == InvoiceStatus.SENT and balance == ZERO:
            status = InvoiceStatus.PAID

        return replace(self, balance=balance, status=status)

    def apply_payment(self, amount: Decimal, now: datetime) -> Invoice:
        """Apply a payment amount to the balance.

        The balance must already be reconciled against the payment ledger.

        Returns:
            New Invoice with the reduced balance; PAID if it reached zero.

        Raises:
            InvalidPaymentAmountError: If amount <= 0.
            InvalidStateTransitionError: If the invoice is still a DRAFT.
            PaymentExceedsBalanceError: If amount > balance (always for PAID).
        """
        if amount <= ZERO:
            raise InvalidPaymentAmountError(f"Payment amount must be greater than 0, got {amount}")

        if self.status == InvoiceStatus.DRAFT:
            raise InvalidStateTransitionError(
                f"Cannot apply payment to invoice {self.id} in state {self.status.value}; "
                f"invoice must be {InvoiceStatus.SENT.value} first"
            )

        if amount > self.balance:
            raise PaymentExceedsBalanceError(self.id, amount, self.balance)

        balance = round2(self.balance - amount)
        status = InvoiceStatus.PAID if balance == ZERO else self.status

        return replace(self, balance=balance, status=status, updated_at=now)
