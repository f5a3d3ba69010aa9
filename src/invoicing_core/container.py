"""Composition root: builds adapters from settings and wires the use cases."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.use_cases.create_customer import CreateCustomerUseCase
from invoicing_core.application.use_cases.create_invoice import CreateInvoiceUseCase
from invoicing_core.application.use_cases.delete_customer import DeleteCustomerUseCase
from invoicing_core.application.use_cases.get_customer import (
    GetCustomerUseCase,
    ListCustomersUseCase,
)
from invoicing_core.application.use_cases.get_invoice import GetInvoiceUseCase, ListInvoicesUseCase
from invoicing_core.application.use_cases.get_payment import GetPaymentUseCase, ListPaymentsUseCase
from invoicing_core.application.use_cases.mark_invoice_as_sent import MarkInvoiceAsSentUseCase
from invoicing_core.application.use_cases.record_payment import RecordPaymentUseCase
from invoicing_core.application.use_cases.render_invoice_pdf import RenderInvoicePdfUseCase
from invoicing_core.application.use_cases.update_customer import UpdateCustomerUseCase
from invoicing_core.application.use_cases.update_invoice import UpdateInvoiceUseCase
from invoicing_core.config import get_settings
from invoicing_core.infrastructure import (
    InMemoryCustomerRepository,
    InMemoryEmailSender,
    InMemoryInvoiceRepository,
    InMemoryLockProvider,
    InMemoryPaymentRepository,
    InMemoryUnitOfWork,
    ReportLabInvoicePdfRenderer,
    SmtpInvoiceEmailSender,
    SystemTimeProvider,
)

if TYPE_CHECKING:
    from invoicing_core.application.ports import (
        InvoiceEmailSender,
        InvoicePdfRenderer,
        LockProvider,
        TimeProvider,
    )
    from invoicing_core.config import Settings

logger = structlog.get_logger(__name__)


def build_email_sender(settings: Settings) -> InvoiceEmailSender:
    if not settings.EMAIL_ENABLED:
        return InMemoryEmailSender(
            sender_address=settings.EMAIL_FROM,
            business_name=settings.BUSINESS_NAME,
        )
    return SmtpInvoiceEmailSender(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        sender_address=settings.EMAIL_FROM,
        business_name=settings.BUSINESS_NAME,
        username=settings.SMTP_USERNAME,
        password=settings.SMTP_PASSWORD,
        use_tls=settings.SMTP_USE_TLS,
        timeout=settings.SMTP_TIMEOUT_SECONDS,
    )


class Container:
    """Holds one set of adapters and exposes every use case over them.

    All use cases share the same repositories, unit of work and lock
    provider, so a container is one consistent in-memory store. Any
    adapter can be overridden, which is how tests inject fixed time or a
    failing email sender.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        time_provider: TimeProvider | None = None,
        lock_provider: LockProvider | None = None,
        pdf_renderer: InvoicePdfRenderer | None = None,
        email_sender: InvoiceEmailSender | None = None,
    ) -> None:
        self.settings = settings or get_settings()

        self.customer_repository = InMemoryCustomerRepository()
        self.invoice_repository = InMemoryInvoiceRepository()
        self.payment_repository = InMemoryPaymentRepository()
        self.unit_of_work = InMemoryUnitOfWork(
            [self.customer_repository, self.invoice_repository, self.payment_repository]
        )

        self.time_provider = time_provider or SystemTimeProvider()
        self.lock_provider = lock_provider or InMemoryLockProvider()
        self.pdf_renderer = pdf_renderer or ReportLabInvoicePdfRenderer(self.settings.BUSINESS_NAME)
        self.email_sender = email_sender or build_email_sender(self.settings)

        logger.debug(
            "container_built",
            environment=self.settings.ENVIRONMENT,
            email_sender=type(self.email_sender).__name__,
        )

    # -------------------------------------------------------------------------
    # Customers
    # -------------------------------------------------------------------------

    def create_customer(self) -> CreateCustomerUseCase:
        return CreateCustomerUseCase(
            lock_provider=self.lock_provider,
            time_provider=self.time_provider,
            unit_of_work=self.unit_of_work,
            customer_repository=self.customer_repository,
        )

    def update_customer(self) -> UpdateCustomerUseCase:
        return UpdateCustomerUseCase(
            lock_provider=self.lock_provider,
            time_provider=self.time_provider,
            unit_of_work=self.unit_of_work,
            customer_repository=self.customer_repository,
        )

    def delete_customer(self) -> DeleteCustomerUseCase:
        return DeleteCustomerUseCase(
            lock_provider=self.lock_provider,
            unit_of_work=self.unit_of_work,
            customer_repository=self.customer_repository,
            invoice_repository=self.invoice_repository,
        )

    def get_customer(self) -> GetCustomerUseCase:
        return GetCustomerUseCase(self.unit_of_work, self.customer_repository)

    def list_customers(self) -> ListCustomersUseCase:
        return ListCustomersUseCase(self.unit_of_work, self.customer_repository)

    # -------------------------------------------------------------------------
    # Invoices
    # -------------------------------------------------------------------------

    def create_invoice(self) -> CreateInvoiceUseCase:
        return CreateInvoiceUseCase(
            lock_provider=self.lock_provider,
            time_provider=self.time_provider,
            unit_of_work=self.unit_of_work,
            customer_repository=self.customer_repository,
            invoice_repository=self.invoice_repository,
        )

    def update_invoice(self) -> UpdateInvoiceUseCase:
        return UpdateInvoiceUseCase(
            lock_provider=self.lock_provider,
            time_provider=self.time_provider,
            unit_of_work=self.unit_of_work,
            invoice_repository=self.invoice_repository,
        )

    def mark_invoice_as_sent(self) -> MarkInvoiceAsSentUseCase:
        return MarkInvoiceAsSentUseCase(
            lock_provider=self.lock_provider,
            time_provider=self.time_provider,
            unit_of_work=self.unit_of_work,
            customer_repository=self.customer_repository,
            invoice_repository=self.invoice_repository,
            pdf_renderer=self.pdf_renderer,
            email_sender=self.email_sender,
        )

    def get_invoice(self) -> GetInvoiceUseCase:
        return GetInvoiceUseCase(
            self.unit_of_work, self.invoice_repository, self.payment_repository
        )

    def list_invoices(self) -> ListInvoicesUseCase:
        return ListInvoicesUseCase(
            self.unit_of_work, self.invoice_repository, self.payment_repository
        )

    def render_invoice_pdf(self) -> RenderInvoicePdfUseCase:
        return RenderInvoicePdfUseCase(
            unit_of_work=self.unit_of_work,
            customer_repository=self.customer_repository,
            invoice_repository=self.invoice_repository,
            payment_repository=self.payment_repository,
            pdf_renderer=self.pdf_renderer,
        )

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    def record_payment(self) -> RecordPaymentUseCase:
        return RecordPaymentUseCase(
            lock_provider=self.lock_provider,
            time_provider=self.time_provider,
            unit_of_work=self.unit_of_work,
            invoice_repository=self.invoice_repository,
            payment_repository=self.payment_repository,
        )

    def get_payment(self) -> GetPaymentUseCase:
        return GetPaymentUseCase(self.unit_of_work, self.payment_repository)

    def list_payments(self) -> ListPaymentsUseCase:
        return ListPaymentsUseCase(
            self.unit_of_work, self.invoice_repository, self.payment_repository
        )
