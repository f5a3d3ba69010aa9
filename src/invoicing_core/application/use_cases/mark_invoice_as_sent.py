from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports.lock_provider import invoice_lock_key
from invoicing_core.domain.exceptions import (
    CustomerNotFoundError,
    DeliveryFailedError,
    InvalidStateTransitionError,
    InvoiceNotFoundError,
)

if TYPE_CHECKING:
    from invoicing_core.application.ports import (
        CustomerRepository,
        InvoiceEmailSender,
        InvoicePdfRenderer,
        InvoiceRepository,
        LockProvider,
        TimeProvider,
        UnitOfWork,
    )
    from invoicing_core.domain.entities import Invoice
    from invoicing_core.domain.value_objects import InvoiceId

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MarkInvoiceAsSentRequest:
    """Input DTO for the send invoice use case."""

    invoice_id: InvoiceId


@dataclass(frozen=True, slots=True)
class MarkInvoiceAsSentResponse:
    """Output DTO for the send invoice use case."""

    invoice: Invoice
    pdf_size: int


class MarkInvoiceAsSentUseCase:
    """Sends a DRAFT invoice to its customer and marks it SENT.

    Flow:
        1. check the send guard (fail fast, before rendering)
        2. render the PDF
        3. email it to the customer
        4. only if delivery succeeded: DRAFT → SENT and persist

    A rendered PDF does not imply a sent invoice: when delivery fails the
    unit of work rolls back and the invoice stays DRAFT.
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        unit_of_work: UnitOfWork,
        customer_repository: CustomerRepository,
        invoice_repository: InvoiceRepository,
        pdf_renderer: InvoicePdfRenderer,
        email_sender: InvoiceEmailSender,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow = unit_of_work
        self._customer_repo = customer_repository
        self._invoice_repo = invoice_repository
        self._pdf_renderer = pdf_renderer
        self._email_sender = email_sender

    def execute(self, request: MarkInvoiceAsSentRequest) -> MarkInvoiceAsSentResponse:
        """Execute the send flow.

        Raises:
            InvoiceNotFoundError: Invoice does not exist.
            CustomerNotFoundError: The invoice's customer no longer exists.
            InvalidStateTransitionError: A send condition failed; the error
                lists which ones.
            DeliveryFailedError: The email could not be delivered; the
                invoice is unchanged.
        """
        with self._lock_provider.acquire(invoice_lock_key(request.invoice_id)), self._uow:
            response = self._execute_within_transaction(request)
            self._uow.commit()

        logger.info(
            "invoice_sent",
            invoice_id=str(request.invoice_id),
            invoice_number=response.invoice.number,
        )
        return response

    def _execute_within_transaction(
        self, request: MarkInvoiceAsSentRequest
    ) -> MarkInvoiceAsSentResponse:
        invoice = self._invoice_repo.get(request.invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(request.invoice_id)

        blockers = invoice.send_blockers()
        if blockers:
            raise InvalidStateTransitionError(
                f"Invoice {invoice.id} cannot be sent; failed conditions: {', '.join(blockers)}",
                failed_conditions=blockers,
            )

        customer = self._customer_repo.get(invoice.customer_id)
        if customer is None:
            raise CustomerNotFoundError(invoice.customer_id)

        pdf_bytes = self._pdf_renderer.render(invoice, customer)

        try:
            self._email_sender.send(invoice, customer, pdf_bytes)
        except DeliveryFailedError as e:
            logger.warning(
                "invoice_delivery_failed",
                invoice_id=str(invoice.id),
                email=customer.email,
                reason=e.reason,
            )
            raise

        sent = invoice.mark_as_sent(self._time_provider.now())
        self._invoice_repo.save(sent)

        return MarkInvoiceAsSentResponse(invoice=sent, pdf_size=len(pdf_bytes))
