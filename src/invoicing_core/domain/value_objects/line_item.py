from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invoicing_core.domain.exceptions import InvalidAmountError, InvalidLineItemError
from invoicing_core.domain.value_objects.money import ZERO, round2, to_money

MAX_DESCRIPTION_LENGTH = 500


@dataclass(frozen=True, slots=True)
class LineItem:
    """One billable entry on an invoice.

    A value object owned by exactly one invoice; it has no identity of its own.

    Rules:
      - description is non-empty after stripping, at most 500 chars
      - quantity is an int >= 1
      - unit_price is non-negative, stored rounded to 2 digits (half-up)
    """

    description: str
    quantity: int
    unit_price: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.description, str) or not self.description.strip():
            raise InvalidLineItemError("Description is required")

        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidLineItemError(
                f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
            )

        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidLineItemError(f"Quantity must be an integer, got {self.quantity!r}")

        if self.quantity < 1:
            raise InvalidLineItemError(
                f"Quantity must be greater than 0, got {self.quantity}"
            )

        try:
            unit_price = to_money(self.unit_price)
        except InvalidAmountError as e:
            raise InvalidLineItemError(f"Invalid unit price: {self.unit_price!r}") from e

        if unit_price < ZERO:
            raise InvalidLineItemError(
                f"Unit price must be greater than or equal to 0, got {unit_price}"
            )

        object.__setattr__(self, "unit_price", unit_price)

        try:
            round2(unit_price * self.quantity)
        except InvalidAmountError as e:
            raise InvalidLineItemError(
                f"Subtotal out of range: {self.quantity} x {unit_price}"
            ) from e

    @property
    def subtotal(self) -> Decimal:
        """unit_price × quantity, rounded to 2 digits."""
        return round2(self.unit_price * self.quantity)
