"""Value objects - Immutable objects defined by their attributes."""

from invoicing_core.domain.value_objects.identifiers import (
    CustomerId,
    EntityId,
    InvoiceId,
    PaymentId,
)
from invoicing_core.domain.value_objects.line_item import LineItem
from invoicing_core.domain.value_objects.money import ZERO, round2, to_money

__all__ = [
    "ZERO",
    "CustomerId",
    "EntityId",
    "InvoiceId",
    "LineItem",
    "PaymentId",
    "round2",
    "to_money",
]
