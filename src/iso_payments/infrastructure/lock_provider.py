from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import TYPE_CHECKING

from iso_payments.application.ports import LockProvider

if TYPE_CHECKING:
    from collections.abc import Iterator


class InMemoryLockProvider(LockProvider):
    """Per-payment locks for a single process.

    A registry lock guards creation of the per-resource locks and is held only
    for the lookup; the per-resource lock is held for the caller's critical
    section, so different payments proceed in parallel.

    Locks are never evicted and do not span processes.
    """

    def __init__(self) -> None:
        self._locks: dict[str, Lock] = {}
        self._registry_lock = Lock()

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        with self._registry_lock:
            lock = self._locks.setdefault(resource_id, Lock())

        with lock:
            yield


class NoOpLockProvider(LockProvider):
    """Lock provider that performs no locking (single-threaded tests)."""

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:  # noqa: ARG002
        yield
