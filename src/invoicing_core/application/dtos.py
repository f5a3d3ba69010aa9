"""Data Transfer Objects shared across use cases."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invoicing_core.domain.value_objects import LineItem


@dataclass(frozen=True)
class LineItemInput:
    """Boundary shape of a line item, before domain validation."""

    description: str
    quantity: int
    unit_price: Decimal | int | str

    def to_line_item(self) -> LineItem:
        """Build the domain value object.

        Raises:
            InvalidLineItemError: If any field fails validation.
        """
        return LineItem(
            description=self.description,
            quantity=self.quantity,
            unit_price=self.unit_price,  # type: ignore[arg-type]
        )
