from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from iso_payments.application.ports import EventPublisher

if TYPE_CHECKING:
    from iso_payments.domain.events import DomainEvent


class InMemoryEventPublisher(EventPublisher):
    """Keeps published events in order; used by tests and local runs."""

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> list[DomainEvent]:
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()


class LoggingEventPublisher(EventPublisher):
    """Writes each event to the log as structured extra data."""

    def publish(self, event: DomainEvent) -> None:
        logger.bind(event=event.to_primitives()).info(
            f"Domain event {event.event_type} for payment {event.payment_id}"
        )
