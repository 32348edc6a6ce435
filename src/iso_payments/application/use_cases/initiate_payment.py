from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC
from typing import TYPE_CHECKING

from loguru import logger

from iso_payments.domain.entities import Payment
from iso_payments.domain.exceptions import DomainError

if TYPE_CHECKING:
    from datetime import tzinfo

    from iso_payments.application.ports import (
        EventPublisher,
        LockProvider,
        PaymentRepository,
        TimeProvider,
    )
    from iso_payments.domain.entities import CreatePaymentInput
    from iso_payments.domain.events import DomainEvent


@dataclass(frozen=True, slots=True)
class InitiatePaymentResponse:
    """Output DTO for the initiate payment use case."""

    payment: Payment  # event queue already drained
    events: tuple[DomainEvent, ...]


class InitiatePaymentUseCase:
    """Creates a payment (pain.001) and records it.

    Responsibilities:
    - Read the clock once; derive the business date in the configured timezone
    - Build the aggregate (all validation happens in the domain)
    - Persist under the new payment's lock
    - Drain and publish the PaymentInitiatedEvent after the save succeeded
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        payment_repository: PaymentRepository,
        event_publisher: EventPublisher,
        business_timezone: tzinfo = UTC,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._payment_repo = payment_repository
        self._event_publisher = event_publisher
        self._business_timezone = business_timezone

    def execute(self, request: CreatePaymentInput) -> InitiatePaymentResponse:
        """Execute the initiation workflow.

        Raises:
            ValidationError: Any invalid field or violated payment invariant.
        """
        now = self._time_provider.now()
        business_date = self._time_provider.today(self._business_timezone)

        try:
            payment = Payment.create(request, now=now, business_date=business_date)
        except DomainError as e:
            logger.warning(f"Payment initiation refused: {e.message} payload={e.payload}")
            raise

        summary = (
            f"message_id={payment.message_id} "
            f"transactions={payment.number_of_transactions} total={payment.total_amount}"
        )

        with self._lock_provider.acquire(str(payment.id)):
            self._payment_repo.save(payment)

        events = payment.domain_events
        self._event_publisher.publish_all(events)

        logger.info(f"Payment {payment.id} initiated: {summary}")
        return InitiatePaymentResponse(payment=payment.clear_domain_events(), events=events)
