from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from invoicing_core.application.ports import CustomerRepository

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Customer
    from invoicing_core.domain.value_objects import CustomerId


class InMemoryCustomerRepository(CustomerRepository):
    """In-memory customer repository for development and testing.

    NOT thread-safe; relies on external LockProvider / UnitOfWork.
    """

    def __init__(self) -> None:
        self._customers: dict[CustomerId, Customer] = {}

    def get(self, customer_id: CustomerId) -> Customer | None:
        customer = self._customers.get(customer_id)
        if customer is None:
            return None
        return copy.deepcopy(customer)

    def get_by_email(self, email: str) -> Customer | None:
        wanted = email.strip().casefold()
        for customer in self._customers.values():
            if customer.email.casefold() == wanted:
                return copy.deepcopy(customer)
        return None

    def save(self, customer: Customer) -> None:
        self._customers[customer.id] = copy.deepcopy(customer)

    def delete(self, customer_id: CustomerId) -> None:
        self._customers.pop(customer_id, None)

    def list_all(self) -> list[Customer]:
        ordered = sorted(self._customers.values(), key=lambda c: (c.name.lower(), c.email))
        return copy.deepcopy(ordered)

    def snapshot(self) -> dict[CustomerId, Customer]:
        return dict(self._customers)

    def restore(self, state: dict[CustomerId, Customer]) -> None:
        self._customers = dict(state)
