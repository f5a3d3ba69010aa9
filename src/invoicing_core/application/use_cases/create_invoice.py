from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports.lock_provider import customer_lock_key
from invoicing_core.domain.entities import Invoice
from invoicing_core.domain.exceptions import CustomerNotFoundError

if TYPE_CHECKING:
    from invoicing_core.application.dtos import LineItemInput
    from invoicing_core.application.ports import (
        CustomerRepository,
        InvoiceRepository,
        LockProvider,
        TimeProvider,
        UnitOfWork,
    )
    from invoicing_core.domain.value_objects import CustomerId

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CreateInvoiceRequest:
    """Input DTO for create invoice use case."""

    customer_id: CustomerId
    line_items: tuple[LineItemInput, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class CreateInvoiceResponse:
    """Output DTO for create invoice use case."""

    invoice: Invoice


class CreateInvoiceUseCase:
    """Creates a DRAFT invoice for an existing customer.

    The customer lock keeps the customer from being deleted while the
    invoice referencing it is written.
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        unit_of_work: UnitOfWork,
        customer_repository: CustomerRepository,
        invoice_repository: InvoiceRepository,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow = unit_of_work
        self._customer_repo = customer_repository
        self._invoice_repo = invoice_repository

    def execute(self, request: CreateInvoiceRequest) -> CreateInvoiceResponse:
        """Create the invoice.

        Raises:
            CustomerNotFoundError: Customer does not exist.
            InvalidLineItemError: A line item fails validation.
        """
        line_items = [item.to_line_item() for item in request.line_items]

        with self._lock_provider.acquire(customer_lock_key(request.customer_id)), self._uow:
            if self._customer_repo.get(request.customer_id) is None:
                raise CustomerNotFoundError(request.customer_id)

            invoice = Invoice.create(
                customer_id=request.customer_id,
                line_items=line_items,
                now=self._time_provider.now(),
            )
            self._invoice_repo.save(invoice)
            self._uow.commit()

        logger.info(
            "invoice_created",
            invoice_id=str(invoice.id),
            customer_id=str(request.customer_id),
            total_amount=str(invoice.total_amount),
        )
        return CreateInvoiceResponse(invoice=invoice)
