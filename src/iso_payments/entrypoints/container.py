from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from iso_payments.application.use_cases import ApplyStatusReportUseCase, InitiatePaymentUseCase
from iso_payments.config import get_settings
from iso_payments.core.logging import configure_logger, intercept_standard_logging
from iso_payments.infrastructure import (
    InMemoryEventPublisher,
    InMemoryLockProvider,
    InMemoryPaymentRepository,
    LoggingEventPublisher,
    SystemTimeProvider,
)

if TYPE_CHECKING:
    from iso_payments.application.ports import (
        EventPublisher,
        LockProvider,
        PaymentRepository,
        TimeProvider,
    )
    from iso_payments.config import Settings


@dataclass(frozen=True)
class Container:
    """Wired adapters and use cases for one process."""

    settings: Settings
    payment_repository: PaymentRepository
    time_provider: TimeProvider
    lock_provider: LockProvider
    event_publisher: EventPublisher
    initiate_payment: InitiatePaymentUseCase
    apply_status_report: ApplyStatusReportUseCase


def build_container(
    settings: Settings | None = None,
    *,
    payment_repository: PaymentRepository | None = None,
    time_provider: TimeProvider | None = None,
    configure_logging: bool = True,
) -> Container:
    """Build the composition root.

    Args:
        settings: Settings to use; defaults to get_settings().
        payment_repository: Persistence adapter; defaults to in-memory.
        time_provider: Clock; defaults to the system clock.
        configure_logging: Reconfigure loguru from settings and route stdlib
            logging records through it.

    Returns:
        A Container with both use cases wired to the same adapters.
    """
    settings = settings or get_settings()
    if configure_logging:
        configure_logger(settings)
        intercept_standard_logging()

    repository = payment_repository if payment_repository is not None else InMemoryPaymentRepository()
    clock = time_provider if time_provider is not None else SystemTimeProvider()
    locks = InMemoryLockProvider()
    publisher: EventPublisher = (
        InMemoryEventPublisher() if settings.event_publisher == "memory" else LoggingEventPublisher()
    )

    logger.info(
        f"Payments core wired: repository={type(repository).__name__} "
        f"publisher={type(publisher).__name__} business_timezone={settings.business_timezone}"
    )

    return Container(
        settings=settings,
        payment_repository=repository,
        time_provider=clock,
        lock_provider=locks,
        event_publisher=publisher,
        initiate_payment=InitiatePaymentUseCase(
            lock_provider=locks,
            time_provider=clock,
            payment_repository=repository,
            event_publisher=publisher,
            business_timezone=settings.business_tz,
        ),
        apply_status_report=ApplyStatusReportUseCase(
            lock_provider=locks,
            time_provider=clock,
            payment_repository=repository,
            event_publisher=publisher,
        ),
    )
