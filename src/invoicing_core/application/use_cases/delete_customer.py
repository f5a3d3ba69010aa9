from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports.lock_provider import customer_lock_key
from invoicing_core.domain.exceptions import CustomerHasInvoicesError, CustomerNotFoundError

if TYPE_CHECKING:
    from invoicing_core.application.ports import (
        CustomerRepository,
        InvoiceRepository,
        LockProvider,
        UnitOfWork,
    )
    from invoicing_core.domain.value_objects import CustomerId

logger = structlog.get_logger(__name__)


class DeleteCustomerUseCase:
    """Deletes a customer that no invoice references.

    Invoices are never deleted, so a customer with any invoice stays.
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        unit_of_work: UnitOfWork,
        customer_repository: CustomerRepository,
        invoice_repository: InvoiceRepository,
    ) -> None:
        self._lock_provider = lock_provider
        self._uow = unit_of_work
        self._customer_repo = customer_repository
        self._invoice_repo = invoice_repository

    def execute(self, customer_id: CustomerId) -> None:
        """Raises CustomerNotFoundError or CustomerHasInvoicesError."""
        with self._lock_provider.acquire(customer_lock_key(customer_id)), self._uow:
            if self._customer_repo.get(customer_id) is None:
                raise CustomerNotFoundError(customer_id)

            if self._invoice_repo.exists_for_customer(customer_id):
                raise CustomerHasInvoicesError(
                    f"Customer {customer_id} has invoices and cannot be deleted"
                )

            self._customer_repo.delete(customer_id)
            self._uow.commit()

        logger.info("customer_deleted", customer_id=str(customer_id))
