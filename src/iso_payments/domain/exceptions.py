"""Domain exceptions for iso-payments.

Exception hierarchy:
    DomainError (base, tagged with ErrorKind)
    ├── ValidationError          kind=VALIDATION
    ├── InvalidTransitionError   kind=INVALID_TRANSITION
    └── PaymentNotFoundError     kind=NOT_FOUND

Every error carries a structured ``payload`` naming the offending field(s) or
status. Callers map errors to transport responses by ``error.kind`` rather
than by subclass checks.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Closed set of domain error categories."""

    VALIDATION = "validation"
    INVALID_TRANSITION = "invalid_transition"
    NOT_FOUND = "not_found"


class DomainError(Exception):
    """Base exception for all domain-level errors.

    Attributes:
        message: Human readable description.
        kind: Category used for dispatch.
        payload: Offending values for diagnostics.
    """

    kind: ErrorKind

    def __init__(self, message: str, payload: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload: dict[str, Any] = dict(payload or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r}, payload={self.payload!r})"


class ValidationError(DomainError):
    """Raised when input data is malformed or inconsistent.

    Format violations, checksum failures, range violations and cross-field
    mismatches (e.g. mixed currencies) all land here. Recoverable by fixing
    the input.
    """

    kind = ErrorKind.VALIDATION


class InvalidTransitionError(DomainError):
    """Raised when an operation is not allowed in the payment's current status.

    Valid transitions:
        - initiated → cleared (mark_as_cleared)
        - cleared → settled (mark_as_settled)
        - initiated | cleared → rejected (reject)

    settled and rejected are terminal. This signals an ordering bug or a stale
    read; blind retries will fail the same way.
    """

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(
        self,
        message: str,
        current_status: str,
        expected_status: str | None = None,
    ) -> None:
        payload: dict[str, Any] = {"currentStatus": current_status}
        if expected_status is not None:
            payload["expectedStatus"] = expected_status
        super().__init__(message, payload)
        self.current_status = current_status
        self.expected_status = expected_status


class PaymentNotFoundError(DomainError):
    """Raised when a payment cannot be found by ID."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, payment_id: str) -> None:
        super().__init__(f"Payment not found: {payment_id}", {"paymentId": payment_id})
        self.payment_id = payment_id
