from __future__ import annotations

from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import CustomerNotFoundError

if TYPE_CHECKING:
    from invoicing_core.application.ports import CustomerRepository, UnitOfWork
    from invoicing_core.domain.entities import Customer
    from invoicing_core.domain.value_objects import CustomerId


class GetCustomerUseCase:
    def __init__(self, unit_of_work: UnitOfWork, customer_repository: CustomerRepository) -> None:
        self._uow = unit_of_work
        self._customer_repo = customer_repository

    def execute(self, customer_id: CustomerId) -> Customer:
        """Raises CustomerNotFoundError if the customer does not exist."""
        with self._uow:
            customer = self._customer_repo.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer


class ListCustomersUseCase:
    def __init__(self, unit_of_work: UnitOfWork, customer_repository: CustomerRepository) -> None:
        self._uow = unit_of_work
        self._customer_repo = customer_repository

    def execute(self) -> list[Customer]:
        with self._uow:
            return self._customer_repo.list_all()
