from __future__ import annotations

import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from html import escape
from typing import TYPE_CHECKING

import structlog

from invoicing_core.application.ports import InvoiceEmailSender
from invoicing_core.domain.exceptions import DeliveryFailedError
from invoicing_core.infrastructure.formatting import format_currency, format_date

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Customer, Invoice

logger = structlog.get_logger(__name__)

EMAIL_BODY_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"></head>
<body style="font-family: Arial, sans-serif; color: #333;">
  <h1 style="background-color: #2563eb; color: white; padding: 20px;">{business_name}</h1>
  <p>Dear {customer_name},</p>
  <p>Thank you for your business! Please find your invoice attached to this email.</p>
  <table>
    <tr><td><b>Invoice Number:</b></td><td>{invoice_number}</td></tr>
    <tr><td><b>Date:</b></td><td>{invoice_date}</td></tr>
    <tr><td><b>Total Amount:</b></td><td>{total_amount}</td></tr>
    <tr><td><b>Balance Due:</b></td><td>{balance}</td></tr>
  </table>
  <p>If you have any questions about this invoice, please reply to this email.</p>
</body>
</html>
"""


def attachment_filename(invoice: Invoice) -> str:
    return f"invoice-{invoice.id.value.hex[:8]}.pdf"


def build_invoice_message(
    invoice: Invoice,
    customer: Customer,
    pdf_bytes: bytes,
    sender_address: str,
    business_name: str,
) -> EmailMessage:
    """Compose the invoice email: HTML body with the PDF attached."""
    message = EmailMessage()
    message["From"] = sender_address
    message["To"] = customer.email
    message["Subject"] = f"Invoice #{invoice.number} from {business_name}"

    message.set_content(
        f"Dear {customer.name},\n\n"
        f"Please find invoice {invoice.number} attached.\n"
        f"Total: {format_currency(invoice.total_amount)}\n"
        f"Balance due: {format_currency(invoice.balance)}\n"
    )
    message.add_alternative(
        EMAIL_BODY_TEMPLATE.format(
            business_name=escape(business_name),
            customer_name=escape(customer.name),
            invoice_number=invoice.number,
            invoice_date=format_date(invoice.created_at),
            total_amount=format_currency(invoice.total_amount),
            balance=format_currency(invoice.balance),
        ),
        subtype="html",
    )
    message.add_attachment(
        pdf_bytes,
        maintype="application",
        subtype="pdf",
        filename=attachment_filename(invoice),
    )
    return message


def _check_deliverable(invoice: Invoice, customer: Customer, pdf_bytes: bytes) -> None:
    if not customer.email:
        raise DeliveryFailedError(invoice.id, "customer email is required to send invoice")
    if not pdf_bytes:
        raise DeliveryFailedError(invoice.id, "PDF bytes cannot be empty")


class SmtpInvoiceEmailSender(InvoiceEmailSender):
    """Delivers invoices over SMTP (optionally STARTTLS + login).

    One connection per send; no retries. Every SMTP or socket failure is
    reported as DeliveryFailedError.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender_address: str,
        business_name: str,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender_address = sender_address
        self._business_name = business_name
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def send(self, invoice: Invoice, customer: Customer, pdf_bytes: bytes) -> None:
        _check_deliverable(invoice, customer, pdf_bytes)

        message = build_invoice_message(
            invoice, customer, pdf_bytes, self._sender_address, self._business_name
        )

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                if self._use_tls:
                    smtp.starttls()
                if self._username:
                    smtp.login(self._username, self._password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "invoice_email_failed",
                invoice_id=str(invoice.id),
                email=customer.email,
                error=str(e),
            )
            raise DeliveryFailedError(invoice.id, f"failed to send email: {e}") from e

        logger.info("invoice_email_sent", invoice_number=invoice.number, email=customer.email)


@dataclass(frozen=True, slots=True)
class SentEmail:
    """One message captured by InMemoryEmailSender."""

    invoice_number: str
    recipient: str
    message: EmailMessage


class InMemoryEmailSender(InvoiceEmailSender):
    """Email sender that keeps messages in an outbox instead of sending.

    Used when email delivery is disabled (development) and in tests.
    """

    def __init__(self, sender_address: str, business_name: str) -> None:
        self._sender_address = sender_address
        self._business_name = business_name
        self.outbox: list[SentEmail] = []

    def send(self, invoice: Invoice, customer: Customer, pdf_bytes: bytes) -> None:
        _check_deliverable(invoice, customer, pdf_bytes)
        message = build_invoice_message(
            invoice, customer, pdf_bytes, self._sender_address, self._business_name
        )
        self.outbox.append(
            SentEmail(invoice_number=invoice.number, recipient=customer.email, message=message)
        )
