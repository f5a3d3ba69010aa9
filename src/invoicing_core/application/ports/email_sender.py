from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Customer, Invoice


class InvoiceEmailSender(ABC):
    """Port for delivering an invoice to its customer.

    Contract:
    - send() returns normally only when delivery succeeded
    - Every failure surfaces as DeliveryFailedError
    - send() MUST NOT retry; retry policy belongs to the caller
    """

    @abstractmethod
    def send(self, invoice: Invoice, customer: Customer, pdf_bytes: bytes) -> None:
        """Deliver the invoice with the PDF attached.

        Raises:
            DeliveryFailedError: If the email could not be delivered.
        """
