from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class TimeProvider(ABC):
    """Clock port.

    Use cases never read the wall clock themselves. Every created_at and
    updated_at stamp, and the default payment date, comes from now().
    Implementations must return datetimes with tzinfo=datetime.UTC;
    entities compare payment dates against now() and a naive or offset
    value would make those comparisons wrong.
    """

    @abstractmethod
    def now(self) -> datetime: ...
