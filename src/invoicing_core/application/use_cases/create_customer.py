from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports.lock_provider import customer_email_lock_key
from invoicing_core.domain.entities import Customer
from invoicing_core.domain.exceptions import DuplicateCustomerEmailError

if TYPE_CHECKING:
    from invoicing_core.application.ports import (
        CustomerRepository,
        LockProvider,
        TimeProvider,
        UnitOfWork,
    )

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CreateCustomerRequest:
    """Input DTO for create customer use case."""

    name: str
    email: str
    address: str | None = None
    phone: str | None = None


class CreateCustomerUseCase:
    """Creates a customer with a unique email address."""

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

    def execute(self, request: CreateCustomerRequest) -> Customer:
        """Create the customer.

        Raises:
            InvalidCustomerError: Name or email missing, or email malformed.
            DuplicateCustomerEmailError: Email already used by another customer.
        """
        customer = Customer.create(
            name=request.name,
            email=request.email,
            now=self._time_provider.now(),
            address=request.address,
            phone=request.phone,
        )

        with self._lock_provider.acquire(customer_email_lock_key(customer.email)), self._uow:
            if self._customer_repo.get_by_email(customer.email) is not None:
                raise DuplicateCustomerEmailError(customer.email)

            self._customer_repo.save(customer)
            self._uow.commit()

        logger.info("customer_created", customer_id=str(customer.id), email=customer.email)
        return customer
