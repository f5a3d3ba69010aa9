"""Domain entities - Objects with identity and lifecycle."""

from invoicing_core.domain.entities.customer import Customer
from invoicing_core.domain.entities.invoice import Invoice, InvoiceStatus
from invoicing_core.domain.entities.payment import Payment

__all__ = [
    "Customer",
    "Invoice",
    "InvoiceStatus",
    "Payment",
]
