from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self


class UnitOfWork(ABC):
    """Port for the transaction boundary around one command.

    Contract:
    - Writes made through repositories inside the context become visible
      together on commit() or not at all
    - Leaving the context without commit() rolls back
    - Leaving the context with an exception rolls back and re-raises

    Usage:
        with unit_of_work:
            payment_repository.save(payment)
            invoice_repository.save(invoice)
            unit_of_work.commit()
    """

    @abstractmethod
    def begin(self) -> None:
        """Start the transaction."""

    @abstractmethod
    def commit(self) -> None:
        """Make every write since begin() durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every write since begin()."""

    def __enter__(self) -> Self:
        self.begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # rollback() after commit() is a no-op in implementations
        self.rollback()
