from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from iso_payments.domain.enums import PaymentStatus
from iso_payments.domain.exceptions import DomainError, PaymentNotFoundError, ValidationError
from iso_payments.domain.value_objects import Uuid

if TYPE_CHECKING:
    from datetime import date, datetime

    from iso_payments.application.ports import (
        EventPublisher,
        LockProvider,
        PaymentRepository,
        TimeProvider,
    )
    from iso_payments.domain.entities import Payment
    from iso_payments.domain.events import DomainEvent

SUPPORTED_STATUSES = (PaymentStatus.CLEARED, PaymentStatus.SETTLED, PaymentStatus.REJECTED)


@dataclass(frozen=True, slots=True)
class StatusReportRequest:
    """Input DTO: one transaction status from a pacs.002 status report.

    transaction_status is the ``<TxSts>`` code: ACCC, ACSC or RJCT.
    """

    payment_id: str
    transaction_status: str
    clearing_reference: str | None = None
    settlement_date: date | None = None
    reason_code: str | None = None


@dataclass(frozen=True, slots=True)
class StatusReportResponse:
    """Output DTO for the status report use case."""

    payment: Payment  # event queue already drained
    events: tuple[DomainEvent, ...]


class ApplyStatusReportUseCase:
    """Applies a pacs.002 transaction status to a stored payment.

    Responsibilities:
    - Acquire the per-payment lock before loading
    - Fetch current time inside the lock
    - Map ACCC / ACSC / RJCT onto the aggregate's transitions
    - Persist, then drain and publish the resulting event
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        payment_repository: PaymentRepository,
        event_publisher: EventPublisher,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._payment_repo = payment_repository
        self._event_publisher = event_publisher

    def execute(self, request: StatusReportRequest) -> StatusReportResponse:
        """Execute the status report workflow.

        Raises:
            ValidationError: Malformed payment id, unsupported status code or
                missing/blank status detail.
            PaymentNotFoundError: Payment does not exist.
            InvalidTransitionError: The payment's status does not allow it.
        """
        payment_id = Uuid.create(request.payment_id)
        status = self._parse_status(request.transaction_status)

        with self._lock_provider.acquire(str(payment_id)):
            updated = self._execute_within_lock(payment_id, status, request)

        events = updated.domain_events
        self._event_publisher.publish_all(events)

        logger.info(f"Payment {payment_id} moved to {updated.status.value}")
        return StatusReportResponse(payment=updated.clear_domain_events(), events=events)

    def _execute_within_lock(
        self,
        payment_id: Uuid,
        status: PaymentStatus,
        request: StatusReportRequest,
    ) -> Payment:
        now = self._time_provider.now()

        payment = self._payment_repo.find_by_id(payment_id)
        if payment is None:
            raise PaymentNotFoundError(str(payment_id))

        try:
            updated = self._apply(payment, status, request, now)
        except DomainError as e:
            logger.warning(
                f"Status report {status.value} refused for payment {payment_id}: "
                f"{e.message} payload={e.payload}"
            )
            raise

        self._payment_repo.save(updated)
        return updated

    @staticmethod
    def _apply(
        payment: Payment,
        status: PaymentStatus,
        request: StatusReportRequest,
        now: datetime,
    ) -> Payment:
        if status is PaymentStatus.CLEARED:
            return payment.mark_as_cleared(request.clearing_reference or "", now=now)

        if status is PaymentStatus.SETTLED:
            if request.settlement_date is None:
                raise ValidationError(
                    "Settlement date is required for ACSC.", {"settlementDate": None}
                )
            return payment.mark_as_settled(request.settlement_date, now=now)

        return payment.reject(request.reason_code or "", now=now)

    @staticmethod
    def _parse_status(code: str) -> PaymentStatus:
        normalized = code.strip().upper()
        for status in SUPPORTED_STATUSES:
            if status.value == normalized:
                return status
        raise ValidationError(
            "Unsupported pacs.002 transaction status.",
            {"transactionStatus": code, "supported": [s.value for s in SUPPORTED_STATUSES]},
        )
