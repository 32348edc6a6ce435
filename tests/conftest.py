"""Shared pytest fixtures for the test suite."""

from datetime import UTC, date, datetime

import pytest

from iso_payments.domain.entities import (
    CreateCreditTransferInput,
    CreatePaymentInput,
    DebtorInput,
    Payment,
)
from iso_payments.domain.enums import ServiceLevel
from iso_payments.infrastructure.lock_provider import InMemoryLockProvider
from iso_payments.infrastructure.time_provider import FixedTimeProvider

VALID_FR_IBAN = "FR7630006000011234567890189"
VALID_DE_IBAN = "DE89370400440532013000"
VALID_GB_IBAN = "GB82WEST12345698765432"


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2026, 3, 2, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def today(fixed_time: datetime) -> date:
    return fixed_time.date()


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(fixed_time)


@pytest.fixture
def lock_provider() -> InMemoryLockProvider:
    """An in-memory lock provider for testing."""
    return InMemoryLockProvider()


@pytest.fixture
def transfer_input() -> CreateCreditTransferInput:
    """A valid 1000 EUR credit transfer to a French creditor."""
    return CreateCreditTransferInput(
        amount=1000,
        currency="EUR",
        creditor_name="Jane Doe",
        creditor_iban=VALID_FR_IBAN,
        creditor_bic="BNPAFRPP",
        creditor_country="FR",
        end_to_end_id="E2E-001",
    )


@pytest.fixture
def debtor_input() -> DebtorInput:
    return DebtorInput(
        name="John Doe",
        iban=VALID_DE_IBAN,
        bic="COBADEFFXXX",
        country="DE",
    )


@pytest.fixture
def payment_input(
    transfer_input: CreateCreditTransferInput,
    debtor_input: DebtorInput,
    today: date,
) -> CreatePaymentInput:
    """A valid single-transfer SEPA payment executing today."""
    return CreatePaymentInput(
        credit_transfers=[transfer_input],
        debtor=debtor_input,
        requested_execution_date=today,
        service_level=ServiceLevel.SEPA,
    )


@pytest.fixture
def initiated_payment(payment_input: CreatePaymentInput, fixed_time: datetime) -> Payment:
    return Payment.create(payment_input, now=fixed_time)


@pytest.fixture
def cleared_payment(initiated_payment: Payment, fixed_time: datetime) -> Payment:
    return initiated_payment.mark_as_cleared("CLR-2026-0001", now=fixed_time)


@pytest.fixture
def settled_payment(cleared_payment: Payment, fixed_time: datetime, today: date) -> Payment:
    return cleared_payment.mark_as_settled(today, now=fixed_time)


@pytest.fixture
def rejected_payment(initiated_payment: Payment, fixed_time: datetime) -> Payment:
    return initiated_payment.reject("AC01", now=fixed_time)
