"""Fixed-point money arithmetic.

Every monetary value (unit price, subtotal, total, balance, payment amount)
passes through round2() before it is stored or compared. Binary floats are
never accepted: Decimal("0.1") + Decimal("0.2") == Decimal("0.3") must hold
for balance == 0 checks to be exact.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from invoicing_core.domain.exceptions import InvalidAmountError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def round2(value: Decimal) -> Decimal:
    """Round to 2 fractional digits, half away from zero (not banker's rounding).

    Raises:
        InvalidAmountError: If the value has too many digits to keep cents.
    """
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Monetary value out of range: {value}") from e


def to_money(value: Decimal | int | str) -> Decimal:
    """Convert a Decimal, int or numeric string to a rounded money value.

    Raises:
        InvalidAmountError: For floats, bools, unparsable strings, NaN, infinity
            and values too large to hold cents.
    """
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, str)):
        raise InvalidAmountError(
            f"Monetary values must be Decimal, int or str, got {type(value).__name__}"
        )

    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Invalid monetary value: {value!r}") from e

    if not amount.is_finite():
        raise InvalidAmountError(f"Monetary value must be finite, got {value!r}")

    return round2(amount)
