from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class LockProvider(ABC):
    """Port for per-payment mutation serialization.

    The domain assumes it always works on an exclusively held in-memory
    instance. This port provides that guarantee: at most one load → transition
    → save sequence is in flight per payment id.

    Contract:
    - acquire() MUST serialize access to the same resource_id
    - acquire() MUST release the lock when the context exits (normal or exception)
    - acquire() MUST be blocking (waits until lock is available)
    - Different resource_ids MAY be acquired concurrently
    """

    @abstractmethod
    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        """Hold the lock for ``resource_id`` for the duration of the context.

        Args:
            resource_id: Canonical payment id string (str(payment.id)).
        """
        ...
