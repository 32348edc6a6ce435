"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from iso_payments.application.ports.event_publisher import EventPublisher
from iso_payments.application.ports.lock_provider import LockProvider
from iso_payments.application.ports.payment_repository import PaymentRepository
from iso_payments.application.ports.time_provider import TimeProvider

__all__ = [
    "EventPublisher",
    "LockProvider",
    "PaymentRepository",
    "TimeProvider",
]
