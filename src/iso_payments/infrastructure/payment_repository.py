from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from loguru import logger

from iso_payments.application.ports import PaymentRepository
from iso_payments.domain.entities import Payment

if TYPE_CHECKING:
    from iso_payments.domain.entities import PaymentPrimitives
    from iso_payments.domain.value_objects import Uuid


class InMemoryPaymentRepository(PaymentRepository):
    """In-memory payment repository for tests and single-process use.

    Implementation notes:
    - Stores Payment.to_primitives() snapshots keyed by the id string
    - find_by_id() rehydrates with Payment.from_primitives(), so callers always
      get a detached aggregate with an empty event queue
    - NOT thread-safe; relies on external LockProvider for serialization

    Going through the primitive form exercises the same contract a database
    adapter would use, so a payment that cannot round-trip fails here first.
    """

    def __init__(self) -> None:
        self._payments: dict[str, PaymentPrimitives] = {}

    def find_by_id(self, payment_id: Uuid) -> Payment | None:
        primitives = self._payments.get(str(payment_id))
        if primitives is None:
            logger.debug(f"Payment {payment_id} not found in memory store")
            return None
        return Payment.from_primitives(copy.deepcopy(primitives))

    def save(self, payment: Payment) -> None:
        self._payments[str(payment.id)] = payment.to_primitives()
        logger.debug(f"Saved payment {payment.id} with status {payment.status.value}")

    def __len__(self) -> int:
        return len(self._payments)
