from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime, tzinfo


class TimeProvider(ABC):
    """Port for clock reads.

    Contract:
    - now() MUST return a datetime with tzinfo=datetime.UTC
    - today() derives the business date from now() in a given timezone; the
      payment execution date check compares against it
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current UTC datetime (tzinfo=datetime.UTC)."""
        ...

    def today(self, tz: tzinfo = UTC) -> date:
        """Return the calendar date of now() as seen in ``tz``."""
        return self.now().astimezone(tz).date()
