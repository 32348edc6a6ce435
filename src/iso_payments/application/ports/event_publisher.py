from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from iso_payments.domain.events import DomainEvent


class EventPublisher(ABC):
    """Port for delivering drained domain events.

    The aggregate only queues events. Use cases drain them after a successful
    save and hand them here, in emission order. Delivery is fire-and-forget
    from the domain's point of view.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Publish a single domain event."""

    def publish_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.publish(event)
