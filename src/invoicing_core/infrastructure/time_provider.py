from datetime import UTC, datetime, timedelta

from invoicing_core.application.ports import TimeProvider


def ensure_utc(value: datetime) -> datetime:
    """Reject anything that is not explicitly tzinfo=UTC."""
    if value.tzinfo is not UTC:
        raise ValueError(f"datetime must have tzinfo=UTC, got tzinfo={value.tzinfo}")
    return value


class SystemTimeProvider(TimeProvider):
    """Wall clock, always in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Controllable clock for tests.

    Returns the same instant until moved with set_time() or advance().
    With ``tick`` set, every now() call moves the clock forward by that
    much afterwards, which gives consecutive invoices and payments
    distinct, ordered timestamps. Not thread-safe.
    """

    def __init__(self, fixed_time: datetime, tick: timedelta | None = None) -> None:
        self._current = ensure_utc(fixed_time)
        self._tick = tick

    def now(self) -> datetime:
        current = self._current
        if self._tick:
            self._current = current + self._tick
        return current

    def set_time(self, new_time: datetime) -> None:
        self._current = ensure_utc(new_time)

    def advance(self, delta: timedelta) -> None:
        self._current += delta
