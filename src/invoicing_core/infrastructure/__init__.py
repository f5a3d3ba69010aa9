"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Persistence: In-memory repositories and unit of work
- External Services: PDF rendering (ReportLab) and email delivery (SMTP)
- Time Provider: Clock abstraction for testability
- Locking: Per-resource locking

Infrastructure adapters implement the ports defined in the application layer.
"""

from invoicing_core.infrastructure.customer_repository import InMemoryCustomerRepository
from invoicing_core.infrastructure.email_sender import InMemoryEmailSender, SmtpInvoiceEmailSender
from invoicing_core.infrastructure.invoice_repository import InMemoryInvoiceRepository
from invoicing_core.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider
from invoicing_core.infrastructure.payment_repository import InMemoryPaymentRepository
from invoicing_core.infrastructure.pdf_renderer import ReportLabInvoicePdfRenderer
from invoicing_core.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider
from invoicing_core.infrastructure.unit_of_work import InMemoryUnitOfWork

__all__ = [
    "FixedTimeProvider",
    "InMemoryCustomerRepository",
    "InMemoryEmailSender",
    "InMemoryInvoiceRepository",
    "InMemoryLockProvider",
    "InMemoryPaymentRepository",
    "InMemoryUnitOfWork",
    "NoOpLockProvider",
    "ReportLabInvoicePdfRenderer",
    "SmtpInvoiceEmailSender",
    "SystemTimeProvider",
]
