from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from invoicing_core.domain.exceptions import InvalidCustomerError
from invoicing_core.domain.value_objects import CustomerId

if TYPE_CHECKING:
    from datetime import datetime

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
MAX_PHONE_LENGTH = 50


@dataclass(frozen=True, slots=True)
class Customer:
    """Customer billed by invoices.

    Email uniqueness spans all customers and is enforced by the use cases,
    not here.
    """

    id: CustomerId
    name: str
    email: str
    address: str | None
    phone: str | None
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidCustomerError("Customer name is required")

        if not self.email or not self.email.strip():
            raise InvalidCustomerError("Customer email is required")

        if not EMAIL_PATTERN.match(self.email):
            raise InvalidCustomerError(f"Invalid email format: {self.email}")

        if self.phone is not None and len(self.phone) > MAX_PHONE_LENGTH:
            raise InvalidCustomerError(
                f"Phone cannot exceed {MAX_PHONE_LENGTH} characters"
            )

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        now: datetime,
        address: str | None = None,
        phone: str | None = None,
    ) -> Customer:
        return cls(
            id=CustomerId.generate(),
            name=(name or "").strip(),
            email=(email or "").strip(),
            address=address,
            phone=phone,
            created_at=now,
            updated_at=now,
        )

    def update_details(
        self,
        now: datetime,
        name: str | None = None,
        email: str | None = None,
        address: str | None = None,
        phone: str | None = None,
    ) -> Customer:
        """Return a copy with the given fields changed.

        Blank name/email and None address/phone keep the current value.
        """
        return replace(
            self,
            name=name.strip() if name and name.strip() else self.name,
            email=email.strip() if email and email.strip() else self.email,
            address=address if address is not None else self.address,
            phone=phone if phone is not None else self.phone,
            updated_at=now,
        )
