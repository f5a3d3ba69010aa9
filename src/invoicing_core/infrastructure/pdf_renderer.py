from __future__ import annotations

import io
from typing import TYPE_CHECKING

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from invoicing_core.application.ports import InvoicePdfRenderer
from invoicing_core.infrastructure.formatting import format_currency, format_date

if TYPE_CHECKING:
    from invoicing_core.domain.entities import Customer, Invoice

TITLE_FONT = ("Helvetica-Bold", 24)
HEADING_FONT = ("Helvetica-Bold", 12)
NORMAL_FONT = ("Helvetica", 10)
BOLD_FONT = ("Helvetica-Bold", 10)

LINE_HEIGHT = 14
ROW_HEIGHT = 20
MAX_DESCRIPTION_CHARS = 45

# Right edges of the quantity, unit price and subtotal columns, from the left margin
RIGHT_EDGES = (4.0 * inch, 5.1 * inch, 6.25 * inch)


class ReportLabInvoicePdfRenderer(InvoicePdfRenderer):
    """Draws an A4 invoice: title, number and date, bill-to block,
    line item table, then subtotal/total/balance due.

    Starts a new page when the line item table reaches the bottom margin.
    Rendering never changes the invoice.
    """

    def __init__(self, business_name: str) -> None:
        self._business_name = business_name

    def render(self, invoice: Invoice, customer: Customer) -> bytes:
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(f"Invoice {invoice.number}")
        pdf.setAuthor(self._business_name)

        width, height = A4
        left = inch
        right = width - inch
        y = height - inch

        pdf.setFont(*TITLE_FONT)
        pdf.drawCentredString(width / 2, y, "INVOICE")
        y -= 36

        pdf.setFont(*NORMAL_FONT)
        pdf.drawString(left, y, f"Invoice #: {invoice.number}")
        pdf.drawRightString(right, y, f"Date: {format_date(invoice.created_at)}")
        y -= LINE_HEIGHT
        pdf.drawString(left, y, f"Status: {invoice.status.value.upper()}")
        pdf.drawRightString(right, y, self._business_name)
        y -= 2 * LINE_HEIGHT

        y = self._draw_bill_to(pdf, customer, left, y)
        y = self._draw_line_items(pdf, invoice, left, right, y)
        self._draw_totals(pdf, invoice, right, y)

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()

    def _draw_bill_to(self, pdf: canvas.Canvas, customer: Customer, left: float, y: float) -> float:
        pdf.setFont(*HEADING_FONT)
        pdf.drawString(left, y, "Bill To:")
        y -= LINE_HEIGHT + 2

        pdf.setFont(*BOLD_FONT)
        pdf.drawString(left, y, customer.name)
        y -= LINE_HEIGHT

        pdf.setFont(*NORMAL_FONT)
        if customer.address and customer.address.strip():
            for line in customer.address.strip().splitlines():
                pdf.drawString(left, y, line)
                y -= LINE_HEIGHT
        pdf.drawString(left, y, customer.email)
        y -= LINE_HEIGHT
        if customer.phone and customer.phone.strip():
            pdf.drawString(left, y, customer.phone)
            y -= LINE_HEIGHT

        return y - LINE_HEIGHT

    def _draw_line_items(
        self, pdf: canvas.Canvas, invoice: Invoice, left: float, right: float, y: float
    ) -> float:
        y = self._draw_table_header(pdf, left, right, y)

        pdf.setFont(*NORMAL_FONT)
        for item in invoice.line_items:
            if y < 1.5 * inch:
                pdf.showPage()
                y = self._draw_table_header(pdf, left, right, A4[1] - inch)
                pdf.setFont(*NORMAL_FONT)

            description = item.description
            if len(description) > MAX_DESCRIPTION_CHARS:
                description = description[: MAX_DESCRIPTION_CHARS - 3] + "..."

            pdf.drawString(left + 4, y, description)
            pdf.drawRightString(left + RIGHT_EDGES[0], y, str(item.quantity))
            pdf.drawRightString(left + RIGHT_EDGES[1], y, format_currency(item.unit_price))
            pdf.drawRightString(left + RIGHT_EDGES[2], y, format_currency(item.subtotal))
            pdf.line(left, y - 6, right, y - 6)
            y -= ROW_HEIGHT

        return y - LINE_HEIGHT

    def _draw_table_header(self, pdf: canvas.Canvas, left: float, right: float, y: float) -> float:
        pdf.setFillGray(0.9)
        pdf.rect(left, y - 6, right - left, ROW_HEIGHT, stroke=0, fill=1)
        pdf.setFillGray(0)

        pdf.setFont(*HEADING_FONT)
        pdf.drawString(left + 4, y, "Description")
        pdf.drawRightString(left + RIGHT_EDGES[0], y, "Quantity")
        pdf.drawRightString(left + RIGHT_EDGES[1], y, "Unit Price")
        pdf.drawRightString(left + RIGHT_EDGES[2], y, "Subtotal")
        return y - ROW_HEIGHT

    def _draw_totals(self, pdf: canvas.Canvas, invoice: Invoice, right: float, y: float) -> None:
        label_x = right - 2 * inch
        rows = (
            ("Subtotal:", invoice.total_amount, NORMAL_FONT),
            ("Total:", invoice.total_amount, BOLD_FONT),
            ("Balance Due:", invoice.balance, BOLD_FONT),
        )
        for label, amount, font in rows:
            pdf.setFont(*font)
            pdf.drawRightString(label_x, y, label)
            pdf.drawRightString(right, y, format_currency(amount))
            y -= LINE_HEIGHT + 2
