from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Customer, Invoice


class InvoicePdfRenderer(ABC):
    """Port for rendering an invoice document.

    Contract:
    - The invoice passed in is fully computed (reconciled balance, line items)
    - render() MUST NOT change totals, balances or status
    """

    @abstractmethod
    def render(self, invoice: Invoice, customer: Customer) -> bytes:
        """Render the invoice as PDF bytes."""
