"""Domain exceptions for invoicing-core.

Exception hierarchy:
    DomainException (base)
    ├── Not Found Errors
    │   └── NotFoundError
    │       ├── CustomerNotFoundError
    │       ├── InvoiceNotFoundError
    │       └── PaymentNotFoundError
    ├── Validation Errors
    │   └── ValidationError
    │       ├── InvalidCustomerIdError / InvalidInvoiceIdError / InvalidPaymentIdError
    │       ├── InvalidCustomerError
    │       ├── InvalidLineItemError
    │       ├── InvalidLineItemsError
    │       ├── InvalidAmountError
    │       │   └── InvalidPaymentAmountError
    │       └── InvalidPaymentDateError
    ├── Conflict Errors
    │   ├── DuplicateCustomerEmailError
    │   └── CustomerHasInvoicesError
    ├── State & Transition Errors
    │   ├── InvalidStateTransitionError
    │   ├── InvoiceNotEditableError
    │   └── PaymentExceedsBalanceError
    ├── Delivery Errors
    │   └── DeliveryFailedError
    └── Invariant Errors
        ├── DuplicatePaymentError
        └── LedgerInconsistencyError

No error is retried inside the core; retry policy belongs to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from decimal import Decimal


class DomainException(Exception):
    """Base exception for all domain-level errors.

    All domain exceptions inherit from this class to enable
    catching domain errors distinctly from infrastructure errors.
    """


# =============================================================================
# Not Found Errors
# =============================================================================


class NotFoundError(DomainException):
    """Raised when a requested resource does not exist (HTTP 404)."""

    resource = "Resource"

    def __init__(self, resource_id: object) -> None:
        self.resource_id = resource_id
        super().__init__(f"{self.resource} not found: {resource_id}")


class CustomerNotFoundError(NotFoundError):
    resource = "Customer"


class InvoiceNotFoundError(NotFoundError):
    resource = "Invoice"


class PaymentNotFoundError(NotFoundError):
    resource = "Payment"


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(DomainException):
    """Raised when input data is malformed (HTTP 422)."""


class InvalidCustomerIdError(ValidationError):
    """Raised when a customer ID is not a valid UUID."""


class InvalidInvoiceIdError(ValidationError):
    """Raised when an invoice ID is not a valid UUID."""


class InvalidPaymentIdError(ValidationError):
    """Raised when a payment ID is not a valid UUID."""


class InvalidCustomerError(ValidationError):
    """Raised when customer details fail validation (missing name, bad email)."""


class InvalidLineItemError(ValidationError):
    """Raised when a single line item fails validation.

    Description must be non-empty and at most 500 characters,
    quantity at least 1, unit price non-negative.
    """


class InvalidLineItemsError(ValidationError):
    """Raised when a replacement line item collection is empty."""


class InvalidAmountError(ValidationError):
    """Raised when a monetary value cannot be represented as a 2-digit decimal.

    Binary floats are rejected outright.
    """


class InvalidPaymentAmountError(InvalidAmountError):
    """Raised when a payment amount is zero or negative."""


class InvalidPaymentDateError(ValidationError):
    """Raised when a payment date is naive or lies in the future."""


# =============================================================================
# Conflict Errors
# =============================================================================


class DuplicateCustomerEmailError(DomainException):
    """Raised when another customer already uses the email (HTTP 409)."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Customer with email {email} already exists")


class CustomerHasInvoicesError(DomainException):
    """Raised when deleting a customer that invoices still reference (HTTP 409).

    An invoice without a customer cannot exist.
    """


# =============================================================================
# State & Transition Errors
# =============================================================================


class InvalidStateTransitionError(DomainException):
    """Raised when a transition violates the invoice state machine.

    Valid transitions:
        - draft → sent (mark_as_sent, guarded)
        - sent → paid (payment application only)

    ``failed_conditions`` names each send guard that did not hold
    ("status", "line_items", "total_amount"); empty for other transitions.
    """

    def __init__(self, message: str, failed_conditions: Sequence[str] = ()) -> None:
        self.failed_conditions = tuple(failed_conditions)
        super().__init__(message)


class InvoiceNotEditableError(DomainException):
    """Raised when line items are changed on an invoice that is not a draft."""

    def __init__(self, invoice_id: object, status: str) -> None:
        self.invoice_id = invoice_id
        self.status = status
        super().__init__(
            f"Invoice {invoice_id} cannot be edited in status {status}; "
            "only draft invoices can be edited"
        )


class PaymentExceedsBalanceError(DomainException):
    """Raised when a payment amount is greater than the outstanding balance.

    Any positive amount exceeds the zero balance of a paid invoice,
    so this also rejects payments against paid invoices.
    """

    def __init__(self, invoice_id: object, amount: Decimal, balance: Decimal) -> None:
        self.invoice_id = invoice_id
        self.amount = amount
        self.balance = balance
        super().__init__(
            f"Payment amount ({amount}) cannot exceed invoice balance ({balance}) "
            f"for invoice {invoice_id}"
        )


# =============================================================================
# Delivery Errors
# =============================================================================


class DeliveryFailedError(DomainException):
    """Raised when the invoice email cannot be delivered.

    The send flow guarantees the invoice stays in draft when this is raised.
    """

    def __init__(self, invoice_id: object, reason: str) -> None:
        self.invoice_id = invoice_id
        self.reason = reason
        super().__init__(f"Failed to deliver invoice {invoice_id}: {reason}")


# =============================================================================
# Invariant Errors
# =============================================================================


class DuplicatePaymentError(DomainException):
    """Raised when repository save encounters an existing payment ID.

    Payments are immutable once recorded. This is an INVARIANT VIOLATION,
    not a client error.
    """


class LedgerInconsistencyError(DomainException):
    """Raised when recorded payments add up to more than the invoice total.

    The balance can never be negative; reaching this means the payment
    ledger was corrupted outside the record-payment flow.
    """
