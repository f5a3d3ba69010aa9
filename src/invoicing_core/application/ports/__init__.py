"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from invoicing_core.application.ports.customer_repository import CustomerRepository
from invoicing_core.application.ports.email_sender import InvoiceEmailSender
from invoicing_core.application.ports.invoice_repository import InvoiceRepository
from invoicing_core.application.ports.lock_provider import LockProvider
from invoicing_core.application.ports.payment_repository import PaymentRepository
from invoicing_core.application.ports.pdf_renderer import InvoicePdfRenderer
from invoicing_core.application.ports.time_provider import TimeProvider
from invoicing_core.application.ports.unit_of_work import UnitOfWork

__all__ = [
    "CustomerRepository",
    "InvoiceEmailSender",
    "InvoicePdfRenderer",
    "InvoiceRepository",
    "LockProvider",
    "PaymentRepository",
    "TimeProvider",
    "UnitOfWork",
]
