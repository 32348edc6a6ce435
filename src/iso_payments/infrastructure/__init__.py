"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Persistence: in-memory payment repository over the primitive form
- Time Provider: clock abstraction for testability
- Locking: per-payment mutation serialization
- Event Publishing: in-memory and logging publishers

Infrastructure adapters implement the ports defined in the application layer.
"""

from iso_payments.infrastructure.event_publisher import InMemoryEventPublisher, LoggingEventPublisher
from iso_payments.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider
from iso_payments.infrastructure.payment_repository import InMemoryPaymentRepository
from iso_payments.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider

__all__ = [
    "FixedTimeProvider",
    "InMemoryEventPublisher",
    "InMemoryLockProvider",
    "InMemoryPaymentRepository",
    "LoggingEventPublisher",
    "NoOpLockProvider",
    "SystemTimeProvider",
]
