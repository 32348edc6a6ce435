from datetime import UTC, datetime, timedelta

from iso_payments.application.ports import TimeProvider


def _require_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not UTC:
        raise ValueError(f"datetime must have tzinfo=UTC, got tzinfo={moment.tzinfo}")
    return moment


class SystemTimeProvider(TimeProvider):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Clock pinned to a UTC instant that tests move explicitly.

    A payment's lifecycle spans days (initiation, clearing, settlement), so
    tests step the clock with advance() between status reports. Not
    thread-safe.
    """

    def __init__(self, fixed_time: datetime) -> None:
        self._current = _require_utc(fixed_time)

    def now(self) -> datetime:
        return self._current

    def set_time(self, new_time: datetime) -> None:
        self._current = _require_utc(new_time)

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock by ``delta`` and return the new instant."""
        self._current = self._current + delta
        return self._current
