from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports.lock_provider import invoice_lock_key
from invoicing_core.application.services import InvoiceBalanceService
from invoicing_core.domain.entities import InvoiceStatus, Payment
from invoicing_core.domain.exceptions import InvoiceNotFoundError

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal

    from invoicing_core.application.ports import (
        InvoiceRepository,
        LockProvider,
        PaymentRepository,
        TimeProvider,
        UnitOfWork,
    )
    from invoicing_core.domain.entities import Invoice
    from invoicing_core.domain.value_objects import InvoiceId

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RecordPaymentRequest:
    """Input DTO for record payment use case."""

    invoice_id: InvoiceId
    amount: Decimal | int | str
    payment_date: datetime | None = None


@dataclass(frozen=True, slots=True)
class RecordPaymentResponse:
    """Output DTO for record payment use case."""

    payment: Payment
    invoice: Invoice


class RecordPaymentUseCase:
    """Records a payment against an invoice.

    Responsibilities:
    - Acquire the per-invoice lock so concurrent payments serialize
    - Recompute the balance from EVERY persisted payment (never the cached field)
    - Validate the amount against that balance
    - Persist payment and updated invoice in one unit of work

    Steps:
        1. load invoice
        2. balance = round2(total - sum(existing payments))
        3. reject amount <= 0 or amount > balance
        4. new balance = round2(balance - amount); zero → PAID; save both
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        unit_of_work: UnitOfWork,
        invoice_repository: InvoiceRepository,
        payment_repository: PaymentRepository,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow = unit_of_work
        self._invoice_repo = invoice_repository
        self._payment_repo = payment_repository
        self._balance = InvoiceBalanceService(payment_repository)

    def execute(self, request: RecordPaymentRequest) -> RecordPaymentResponse:
        """Execute the record payment workflow.

        Raises:
            InvoiceNotFoundError: Invoice does not exist.
            InvalidAmountError: Amount is not a valid money value.
            InvalidPaymentAmountError: Amount <= 0.
            InvalidPaymentDateError: Payment date is naive or in the future.
            InvalidStateTransitionError: Invoice is still a draft.
            PaymentExceedsBalanceError: Amount > recomputed balance.
        """
        with self._lock_provider.acquire(invoice_lock_key(request.invoice_id)), self._uow:
            response = self._execute_within_transaction(request)
            self._uow.commit()

        logger.info(
            "payment_recorded",
            payment_id=str(response.payment.id),
            invoice_id=str(request.invoice_id),
            amount=str(response.payment.amount),
            balance=str(response.invoice.balance),
            status=response.invoice.status.value,
        )
        if response.invoice.status == InvoiceStatus.PAID:
            logger.info("invoice_paid", invoice_id=str(request.invoice_id))

        return response

    def _execute_within_transaction(self, request: RecordPaymentRequest) -> RecordPaymentResponse:
        now = self._time_provider.now()

        invoice = self._invoice_repo.get(request.invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(request.invoice_id)

        invoice = self._balance.refresh(invoice)

        payment = Payment.create(
            invoice_id=invoice.id,
            amount=request.amount,
            now=now,
            payment_date=request.payment_date,
        )
        updated_invoice = payment.apply_to(invoice, now)

        # Order: payment first, then invoice; both commit together
        self._payment_repo.save(payment)
        self._invoice_repo.save(updated_invoice)

        return RecordPaymentResponse(payment=payment, invoice=updated_invoice)
