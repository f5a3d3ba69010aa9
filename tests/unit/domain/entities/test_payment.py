"""Tests for Payment entity.

Tests cover:
- Payment.create validation: amount > 0, date not naive, not in the future
- Amount rounding before validation
- apply_to against an invoice: state first, then balance
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from invoicing_core.domain.entities import Invoice, InvoiceStatus, Payment
from invoicing_core.domain.exceptions import (
    InvalidAmountError,
    InvalidPaymentAmountError,
    InvalidPaymentDateError,
    InvalidStateTransitionError,
    PaymentExceedsBalanceError,
)
from invoicing_core.domain.value_objects import InvoiceId

# =============================================================================
# Creation
# =============================================================================


class TestPaymentCreate:
    def test_create_valid_payment(self, now: datetime) -> None:
        invoice_id = InvoiceId.generate()

        payment = Payment.create(invoice_id=invoice_id, amount=Decimal("300.00"), now=now)

        assert payment.invoice_id == invoice_id
        assert payment.amount == Decimal("300.00")
        assert payment.created_at == now

    def test_payment_date_defaults_to_now(self, now: datetime) -> None:
        payment = Payment.create(InvoiceId.generate(), Decimal("1"), now)

        assert payment.payment_date == now

    def test_past_payment_date_accepted(self, now: datetime) -> None:
        paid_on = now - timedelta(days=3)

        payment = Payment.create(InvoiceId.generate(), Decimal("1"), now, payment_date=paid_on)

        assert payment.payment_date == paid_on

    def test_amount_is_rounded(self, now: datetime) -> None:
        payment = Payment.create(InvoiceId.generate(), "10.005", now)

        assert payment.amount == Decimal("10.01")

    def test_each_payment_gets_unique_id(self, now: datetime) -> None:
        invoice_id = InvoiceId.generate()

        first = Payment.create(invoice_id, Decimal("1"), now)
        second = Payment.create(invoice_id, Decimal("1"), now)

        assert first.id != second.id


class TestPaymentCreateValidation:
    @pytest.mark.parametrize("amount", ["0", "0.00", "-1.00", "0.004"])
    def test_non_positive_amount_rejected(self, now: datetime, amount: str) -> None:
        with pytest.raises(InvalidPaymentAmountError):
            Payment.create(InvoiceId.generate(), Decimal(amount), now)

    def test_invalid_payment_amount_is_an_amount_error(self, now: datetime) -> None:
        with pytest.raises(InvalidAmountError):
            Payment.create(InvoiceId.generate(), Decimal("0"), now)

    def test_amount_too_large_for_cents_rejected(self, now: datetime) -> None:
        with pytest.raises(InvalidAmountError, match="out of range"):
            Payment.create(InvoiceId.generate(), "1e30", now)

    def test_float_amount_rejected(self, now: datetime) -> None:
        with pytest.raises(InvalidAmountError):
            Payment.create(InvoiceId.generate(), 10.5, now)  # type: ignore[arg-type]

    def test_future_payment_date_rejected(self, now: datetime) -> None:
        with pytest.raises(InvalidPaymentDateError, match="future"):
            Payment.create(
                InvoiceId.generate(), Decimal("1"), now, payment_date=now + timedelta(seconds=1)
            )

    def test_naive_payment_date_rejected(self, now: datetime) -> None:
        naive = datetime(2024, 1, 1, 9, 0, 0)

        with pytest.raises(InvalidPaymentDateError, match="timezone-aware"):
            Payment.create(InvoiceId.generate(), Decimal("1"), now, payment_date=naive)

    def test_payment_is_frozen(self, now: datetime) -> None:
        payment = Payment.create(InvoiceId.generate(), Decimal("1"), now)

        with pytest.raises(AttributeError):
            payment.amount = Decimal("2")  # type: ignore[misc]


# =============================================================================
# Validation against an invoice
# =============================================================================


class TestPaymentAgainstInvoice:
    def test_apply_to_full_balance_pays_invoice(
        self, sent_invoice: Invoice, now: datetime
    ) -> None:
        payment = Payment.create(sent_invoice.id, Decimal("1250.00"), now)

        updated = payment.apply_to(sent_invoice, now)

        assert updated.status == InvoiceStatus.PAID
        assert updated.balance == Decimal("0.00")

    def test_apply_to_rejects_amount_over_balance(
        self, sent_invoice: Invoice, now: datetime
    ) -> None:
        payment = Payment.create(sent_invoice.id, Decimal("1500.00"), now)

        with pytest.raises(PaymentExceedsBalanceError):
            payment.apply_to(sent_invoice, now)

    def test_apply_to_returns_updated_invoice(self, sent_invoice: Invoice, now: datetime) -> None:
        payment = Payment.create(sent_invoice.id, Decimal("300.00"), now)

        updated = payment.apply_to(sent_invoice, now)

        assert updated.balance == Decimal("950.00")
        assert updated.status == InvoiceStatus.SENT
        assert sent_invoice.balance == Decimal("1250.00")

    def test_apply_to_draft_reports_state_error(
        self, draft_invoice: Invoice, now: datetime
    ) -> None:
        payment = Payment.create(draft_invoice.id, Decimal("5000.00"), now)

        with pytest.raises(InvalidStateTransitionError):
            payment.apply_to(draft_invoice, now)

    def test_apply_to_other_invoice_rejected(self, sent_invoice: Invoice, now: datetime) -> None:
        payment = Payment.create(InvoiceId.generate(), Decimal("1"), now)

        with pytest.raises(ValueError):
            payment.apply_to(sent_invoice, now)

    def test_created_at_is_utc(self, now: datetime) -> None:
        payment = Payment.create(InvoiceId.generate(), Decimal("1"), now)

        assert payment.created_at.tzinfo is UTC
