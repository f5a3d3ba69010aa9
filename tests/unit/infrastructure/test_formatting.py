from datetime import UTC, datetime
from decimal import Decimal

import pytest

from invoicing_core.infrastructure.formatting import format_currency, format_date


class TestFormatCurrency:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            ("0", "$0.00"),
            ("5", "$5.00"),
            ("1250", "$1,250.00"),
            ("1234567.891", "$1,234,567.89"),
            ("-5", "-$5.00"),
        ],
    )
    def test_format_currency(self, amount: str, expected: str) -> None:
        assert format_currency(Decimal(amount)) == expected


class TestFormatDate:
    def test_format_date(self) -> None:
        assert format_date(datetime(2024, 1, 5, tzinfo=UTC)) == "January 05, 2024"
