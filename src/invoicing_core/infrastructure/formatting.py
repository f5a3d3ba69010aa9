"""Display formatting shared by the PDF and email adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal

DATE_FORMAT = "%B %d, %Y"


def format_currency(amount: Decimal) -> str:
    """US dollar display, e.g. $1,250.00 or -$5.00."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)
