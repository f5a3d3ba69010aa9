"""Invoicing core - customers, invoices and payments with a ledger-derived balance."""

__version__ = "0.1.0"
