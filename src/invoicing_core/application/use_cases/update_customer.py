from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports.lock_provider import (
    customer_email_lock_key,
    customer_lock_key,
)
from invoicing_core.domain.exceptions import CustomerNotFoundError, DuplicateCustomerEmailError

if TYPE_CHECKING:
    from invoicing_core.application.ports import (
        CustomerRepository,
        LockProvider,
        TimeProvider,
        UnitOfWork,
    )
    from invoicing_core.domain.entities import Customer
    from invoicing_core.domain.value_objects import CustomerId

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateCustomerRequest:
    """Input DTO for update customer use case.

    Fields left as None keep their current value.
    """

    customer_id: CustomerId
    name: str | None = None
    email: str | None = None
    address: str | None = None
    phone: str | None = None


class UpdateCustomerUseCase:
    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        unit_of_work: UnitOfWork,
        customer_repository: CustomerRepository,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._uow = unit_of_work
        self._customer_repo = customer_repository

    def execute(self, request: UpdateCustomerRequest) -> Customer:
        """Update the customer's details.

        Raises:
            CustomerNotFoundError: Customer does not exist.
            InvalidCustomerError: Resulting details fail validation.
            DuplicateCustomerEmailError: New email belongs to another customer.
        """
        lock_keys = [customer_lock_key(request.customer_id)]
        if request.email and request.email.strip():
            lock_keys.append(customer_email_lock_key(request.email))

        with self._lock_provider.acquire_all(lock_keys), self._uow:
            customer = self._customer_repo.get(request.customer_id)
            if customer is None:
                raise CustomerNotFoundError(request.customer_id)

            updated = customer.update_details(
                now=self._time_provider.now(),
                name=request.name,
                email=request.email,
                address=request.address,
                phone=request.phone,
            )

            if updated.email != customer.email:
                other = self._customer_repo.get_by_email(updated.email)
                if other is not None and other.id != customer.id:
                    raise DuplicateCustomerEmailError(updated.email)

            self._customer_repo.save(updated)
            self._uow.commit()

        logger.info("customer_updated", customer_id=str(updated.id))
        return updated
