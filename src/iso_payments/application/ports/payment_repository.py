from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from iso_payments.domain.entities import Payment
    from iso_payments.domain.value_objects import Uuid


class PaymentRepository(ABC):
    """Port for payment persistence.

    Contract:
    - find_by_id() returns None if the payment does not exist (no exception)
    - save() performs upsert keyed by payment.id
    - Pending domain events are NOT persisted; a loaded payment has none
    - Implementations are NOT thread-safe; callers hold the payment's lock
      from LockProvider for the whole load → transition → save sequence

    Adapters work on the primitive form (Payment.to_primitives() /
    Payment.from_primitives()), which is the only persistence contract the
    domain offers.
    """

    @abstractmethod
    def find_by_id(self, payment_id: Uuid) -> Payment | None:
        """Retrieve a payment by ID.

        Args:
            payment_id: The payment identifier.

        Returns:
            The Payment if found, None otherwise.
        """

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """Persist a payment (upsert semantics).

        Args:
            payment: The payment aggregate to save.
        """
