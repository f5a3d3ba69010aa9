"""Typed UUID identifiers for customers, invoices and payments.

Each entity gets its own identifier type so an InvoiceId can never be
passed where a PaymentId is expected. Two identifiers of different types
never compare equal, even when they wrap the same UUID.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Self
from uuid import UUID, uuid4

from invoicing_core.domain.exceptions import (
    InvalidCustomerIdError,
    InvalidInvoiceIdError,
    InvalidPaymentIdError,
    ValidationError,
)


@dataclass(frozen=True, slots=True)
class EntityId:
    """Base for identifier value objects wrapping a UUID v4."""

    label: ClassVar[str] = "entity"
    invalid_error: ClassVar[type[ValidationError]] = ValidationError

    value: UUID

    @classmethod
    def generate(cls) -> Self:
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, id_str: str) -> Self:
        """Parse an identifier from its string form.

        Accepts UUIDs with or without hyphens, in any case.

        Raises:
            The subclass's invalid_error if the string is not a valid UUID.
        """
        try:
            return cls(value=UUID(id_str))
        except (ValueError, AttributeError, TypeError) as e:
            raise cls.invalid_error(f"Invalid {cls.label} ID: {id_str}") from e

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class CustomerId(EntityId):
    label: ClassVar[str] = "customer"
    invalid_error: ClassVar[type[ValidationError]] = InvalidCustomerIdError


@dataclass(frozen=True, slots=True)
class InvoiceId(EntityId):
    label: ClassVar[str] = "invoice"
    invalid_error: ClassVar[type[ValidationError]] = InvalidInvoiceIdError


@dataclass(frozen=True, slots=True)
class PaymentId(EntityId):
    label: ClassVar[str] = "payment"
    invalid_error: ClassVar[type[ValidationError]] = InvalidPaymentIdError
