"""Application services shared by several use cases."""

from invoicing_core.application.services.invoice_balance import InvoiceBalanceService

__all__ = ["InvoiceBalanceService"]
