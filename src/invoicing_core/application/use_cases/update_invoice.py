from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports.lock_provider import invoice_lock_key
from invoicing_core.domain.exceptions import InvoiceNotEditableError, InvoiceNotFoundError

if TYPE_CHECKING:
    from invoicing_core.application.dtos import LineItemInput
    from invoicing_core.application.ports import (
        InvoiceRepository,
        LockProvider,
        TimeProvider,
        UnitOfWork,
    )
    from invoicing_core.domain.entities import Invoice
    from invoicing_core.domain.value_objects import InvoiceId

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateInvoiceRequest:
    """Input DTO for update invoice use case."""

    invoice_id: InvoiceId
    line_items: tuple[LineItemInput, ...]


@dataclass(frozen=True, slots=True)
class UpdateInvoiceResponse:
    """Output DTO for update invoice use case."""

    invoice: Invoice


class UpdateInvoiceUseCase:
    """Replaces the line items of a DRAFT invoice."""

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        unit_of_work: UnitOfWork,
        invoice_repository: InvoiceRepository,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow = unit_of_work
        self._invoice_repo = invoice_repository

    def execute(self, request: UpdateInvoiceRequest) -> UpdateInvoiceResponse:
        """Replace the invoice's line items and recalculate its total.

        Raises:
            InvoiceNotFoundError: Invoice does not exist.
            InvoiceNotEditableError: Invoice is not a draft.
            InvalidLineItemsError: The new collection is empty.
            InvalidLineItemError: A line item fails validation.
        """
        with self._lock_provider.acquire(invoice_lock_key(request.invoice_id)), self._uow:
            invoice = self._invoice_repo.get(request.invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(request.invoice_id)

            # Status is checked before the items so a sent invoice reports
            # "not editable" rather than a line item error
            if not invoice.can_be_edited():
                raise InvoiceNotEditableError(invoice.id, invoice.status.value)

            line_items = [item.to_line_item() for item in request.line_items]
            updated = invoice.replace_line_items(line_items, self._time_provider.now())

            self._invoice_repo.save(updated)
            self._uow.commit()

        logger.info(
            "invoice_updated",
            invoice_id=str(updated.id),
            line_items=len(updated.line_items),
            total_amount=str(updated.total_amount),
        )
        return UpdateInvoiceResponse(invoice=updated)
