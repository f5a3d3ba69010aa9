"""Shared pytest fixtures for the test suite."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from invoicing_core.domain.entities import Customer, Invoice
from invoicing_core.domain.value_objects import LineItem
from invoicing_core.infrastructure.customer_repository import InMemoryCustomerRepository
from invoicing_core.infrastructure.invoice_repository import InMemoryInvoiceRepository
from invoicing_core.infrastructure.lock_provider import NoOpLockProvider
from invoicing_core.infrastructure.payment_repository import InMemoryPaymentRepository
from invoicing_core.infrastructure.time_provider import FixedTimeProvider
from invoicing_core.infrastructure.unit_of_work import InMemoryUnitOfWork


@pytest.fixture
def now() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(now: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(now)


@pytest.fixture
def lock_provider() -> NoOpLockProvider:
    """Use NoOpLockProvider for unit tests (single-threaded)."""
    return NoOpLockProvider()


@pytest.fixture
def customer_repository() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository()


@pytest.fixture
def invoice_repository() -> InMemoryInvoiceRepository:
    return InMemoryInvoiceRepository()


@pytest.fixture
def payment_repository() -> InMemoryPaymentRepository:
    return InMemoryPaymentRepository()


@pytest.fixture
def unit_of_work(
    customer_repository: InMemoryCustomerRepository,
    invoice_repository: InMemoryInvoiceRepository,
    payment_repository: InMemoryPaymentRepository,
) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork([customer_repository, invoice_repository, payment_repository])


@pytest.fixture
def customer(now: datetime) -> Customer:
    return Customer.create(
        name="Acme Corp",
        email="billing@acme.example",
        now=now,
        address="1 Main Street\nSpringfield",
        phone="555-0100",
    )


@pytest.fixture
def line_items() -> list[LineItem]:
    """Items totalling 1250.00: 10 x 100.00 + 5 x 50.00."""
    return [
        LineItem(description="Consulting hours", quantity=10, unit_price=Decimal("100.00")),
        LineItem(description="Support plan", quantity=5, unit_price=Decimal("50.00")),
    ]


@pytest.fixture
def draft_invoice(customer: Customer, line_items: list[LineItem], now: datetime) -> Invoice:
    return Invoice.create(customer_id=customer.id, line_items=line_items, now=now)


@pytest.fixture
def sent_invoice(draft_invoice: Invoice, now: datetime) -> Invoice:
    return draft_invoice.mark_as_sent(now)
