from datetime import datetime
from decimal import Decimal

import pytest

from invoicing_core.application.dtos import LineItemInput
from invoicing_core.application.use_cases.create_invoice import (
    CreateInvoiceRequest,
    CreateInvoiceUseCase,
)
from invoicing_core.domain.entities import Customer, InvoiceStatus
from invoicing_core.domain.exceptions import CustomerNotFoundError, InvalidLineItemError
from invoicing_core.domain.value_objects import CustomerId
from invoicing_core.infrastructure.customer_repository import InMemoryCustomerRepository
from invoicing_core.infrastructure.invoice_repository import InMemoryInvoiceRepository
from invoicing_core.infrastructure.lock_provider import NoOpLockProvider
from invoicing_core.infrastructure.time_provider import FixedTimeProvider
from invoicing_core.infrastructure.unit_of_work import InMemoryUnitOfWork


@pytest.fixture
def use_case(
    lock_provider: NoOpLockProvider,
    time_provider: FixedTimeProvider,
    unit_of_work: InMemoryUnitOfWork,
    customer_repository: InMemoryCustomerRepository,
    invoice_repository: InMemoryInvoiceRepository,
) -> CreateInvoiceUseCase:
    return CreateInvoiceUseCase(
        lock_provider=lock_provider,
        time_provider=time_provider,
        unit_of_work=unit_of_work,
        customer_repository=customer_repository,
        invoice_repository=invoice_repository,
    )


@pytest.fixture
def stored_customer(
    customer: Customer, customer_repository: InMemoryCustomerRepository
) -> Customer:
    customer_repository.save(customer)
    return customer


class TestCreateInvoice:
    def test_creates_draft_with_total(
        self,
        use_case: CreateInvoiceUseCase,
        stored_customer: Customer,
        invoice_repository: InMemoryInvoiceRepository,
        now: datetime,
    ) -> None:
        request = CreateInvoiceRequest(
            customer_id=stored_customer.id,
            line_items=(
                LineItemInput(description="Consulting", quantity=10, unit_price="100.00"),
                LineItemInput(description="Support", quantity=5, unit_price=Decimal("50")),
            ),
        )

        invoice = use_case.execute(request).invoice

        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.total_amount == Decimal("1250.00")
        assert invoice.balance == Decimal("1250.00")
        assert invoice.customer_id == stored_customer.id
        assert invoice.created_at == now
        assert invoice_repository.get(invoice.id) == invoice

    def test_creates_empty_draft(
        self, use_case: CreateInvoiceUseCase, stored_customer: Customer
    ) -> None:
        invoice = use_case.execute(CreateInvoiceRequest(customer_id=stored_customer.id)).invoice

        assert invoice.line_items == ()
        assert invoice.total_amount == Decimal("0.00")

    def test_unknown_customer(
        self, use_case: CreateInvoiceUseCase, invoice_repository: InMemoryInvoiceRepository
    ) -> None:
        customer_id = CustomerId.generate()

        with pytest.raises(CustomerNotFoundError) as exc_info:
            use_case.execute(CreateInvoiceRequest(customer_id=customer_id))

        assert exc_info.value.resource_id == customer_id
        assert invoice_repository.list_all() == []

    def test_invalid_line_item_rejected(
        self,
        use_case: CreateInvoiceUseCase,
        stored_customer: Customer,
        invoice_repository: InMemoryInvoiceRepository,
    ) -> None:
        request = CreateInvoiceRequest(
            customer_id=stored_customer.id,
            line_items=(LineItemInput(description="Bad", quantity=0, unit_price="1"),),
        )

        with pytest.raises(InvalidLineItemError):
            use_case.execute(request)

        assert invoice_repository.list_all() == []
