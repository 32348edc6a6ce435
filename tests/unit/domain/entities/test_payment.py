"""Tests for the Payment aggregate.

Tests cover:
- Payment.create() invariants (non-empty, single currency, execution date)
- Computed values (number of transactions, control sum, total amount)
- Status machine: initiated → cleared → settled, rejected from initiated/cleared
- Domain event emission and draining
- Primitive round trip
"""

import re
from dataclasses import replace
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from iso_payments.domain.entities import (
    CreateCreditTransferInput,
    CreatePaymentInput,
    CreditTransfer,
    Payment,
)
from iso_payments.domain.enums import PaymentStatus, ServiceLevel
from iso_payments.domain.events import (
    PaymentClearedEvent,
    PaymentInitiatedEvent,
    PaymentRejectedEvent,
    PaymentSettledEvent,
)
from iso_payments.domain.exceptions import (
    ErrorKind,
    InvalidTransitionError,
    ValidationError,
)
from iso_payments.domain.value_objects import Money

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def two_transfer_input(
    payment_input: CreatePaymentInput,
    transfer_input: CreateCreditTransferInput,
) -> CreatePaymentInput:
    second = replace(transfer_input, amount=500, end_to_end_id="E2E-002")
    return replace(payment_input, credit_transfers=[transfer_input, second])


# =============================================================================
# Enum Tests
# =============================================================================


class TestPaymentStatus:
    def test_status_values_are_pacs002_codes(self) -> None:
        assert {s.name: s.value for s in PaymentStatus} == {
            "INITIATED": "ACSP",
            "PENDING": "PDNG",
            "SCREENED": "ACWC",
            "CLEARED": "ACCC",
            "SETTLED": "ACSC",
            "REJECTED": "RJCT",
        }

    def test_service_level_codes(self) -> None:
        assert ServiceLevel.SEPA.value == "SEPA"
        assert ServiceLevel.URGENT.value == "URGP"
        assert ServiceLevel.NORMAL.value == "NURG"
        assert ServiceLevel.SWIFT_GPI.value == "G001"


# =============================================================================
# Creation Tests
# =============================================================================


class TestPaymentCreate:
    def test_creates_initiated_payment(self, initiated_payment: Payment, fixed_time: datetime) -> None:
        assert initiated_payment.status == PaymentStatus.INITIATED
        assert initiated_payment.service_level == ServiceLevel.SEPA
        assert initiated_payment.debtor.name == "John Doe"
        assert initiated_payment.creation_date_time == fixed_time
        assert initiated_payment.settlement_date is None
        assert initiated_payment.rejection_reason is None

    def test_message_id_format(self, initiated_payment: Payment, fixed_time: datetime) -> None:
        expected_ms = int(fixed_time.timestamp() * 1000)

        assert re.fullmatch(rf"MSG-{expected_ms}-[0-9a-z]{{8}}", initiated_payment.message_id)

    def test_ids_are_unique(self, payment_input: CreatePaymentInput, fixed_time: datetime) -> None:
        first = Payment.create(payment_input, now=fixed_time)
        second = Payment.create(payment_input, now=fixed_time)

        assert first.id != second.id

    def test_accepts_service_level_code_string(
        self, payment_input: CreatePaymentInput, fixed_time: datetime
    ) -> None:
        payment = Payment.create(replace(payment_input, service_level="G001"), now=fixed_time)

        assert payment.service_level == ServiceLevel.SWIFT_GPI

    def test_raises_for_unknown_service_level(
        self, payment_input: CreatePaymentInput, fixed_time: datetime
    ) -> None:
        with pytest.raises(ValidationError, match="serviceLevel"):
            Payment.create(replace(payment_input, service_level="XXXX"), now=fixed_time)

    def test_raises_for_no_transfers(self, payment_input: CreatePaymentInput, fixed_time: datetime) -> None:
        with pytest.raises(ValidationError, match="at least one"):
            Payment.create(replace(payment_input, credit_transfers=[]), now=fixed_time)

    def test_raises_for_mixed_currencies(
        self,
        payment_input: CreatePaymentInput,
        transfer_input: CreateCreditTransferInput,
        fixed_time: datetime,
    ) -> None:
        usd = replace(transfer_input, currency="USD", end_to_end_id="E2E-USD")

        with pytest.raises(ValidationError, match="same currency") as exc_info:
            Payment.create(
                replace(payment_input, credit_transfers=[transfer_input, usd]),
                now=fixed_time,
            )

        assert exc_info.value.payload == {"currencies": ["EUR", "USD"]}

    def test_currency_comparison_uses_normalized_codes(
        self,
        payment_input: CreatePaymentInput,
        transfer_input: CreateCreditTransferInput,
        fixed_time: datetime,
    ) -> None:
        lower = replace(transfer_input, currency=" eur")

        payment = Payment.create(
            replace(payment_input, credit_transfers=[transfer_input, lower]), now=fixed_time
        )

        assert payment.currency == "EUR"

    def test_raises_for_past_execution_date(
        self, payment_input: CreatePaymentInput, fixed_time: datetime, today: date
    ) -> None:
        yesterday = today - timedelta(days=1)

        with pytest.raises(ValidationError, match="past") as exc_info:
            Payment.create(replace(payment_input, requested_execution_date=yesterday), now=fixed_time)

        assert exc_info.value.payload == {"requestedExecutionDate": yesterday.isoformat()}

    def test_accepts_execution_date_today(
        self, payment_input: CreatePaymentInput, fixed_time: datetime, today: date
    ) -> None:
        payment = Payment.create(replace(payment_input, requested_execution_date=today), now=fixed_time)

        assert payment.requested_execution_date == today

    def test_execution_datetime_is_truncated_to_date(
        self, payment_input: CreatePaymentInput, fixed_time: datetime, today: date
    ) -> None:
        # earlier in the day than "now" but same calendar date
        early_today = datetime(today.year, today.month, today.day, 0, 0, tzinfo=UTC)

        payment = Payment.create(
            replace(payment_input, requested_execution_date=early_today), now=fixed_time
        )

        assert payment.requested_execution_date == today
        assert type(payment.requested_execution_date) is date

    def test_business_date_overrides_now_date(
        self, payment_input: CreatePaymentInput, fixed_time: datetime, today: date
    ) -> None:
        tomorrow = today + timedelta(days=1)

        with pytest.raises(ValidationError, match="past"):
            Payment.create(payment_input, now=fixed_time, business_date=tomorrow)

    def test_invalid_transfer_aborts_creation(
        self,
        payment_input: CreatePaymentInput,
        transfer_input: CreateCreditTransferInput,
        fixed_time: datetime,
    ) -> None:
        bad = replace(transfer_input, creditor_bic="??")

        with pytest.raises(ValidationError, match="BIC"):
            Payment.create(replace(payment_input, credit_transfers=[transfer_input, bad]), now=fixed_time)

    def test_invalid_debtor_aborts_creation(
        self, payment_input: CreatePaymentInput, fixed_time: datetime
    ) -> None:
        debtor = replace(payment_input.debtor, iban="DE89370400440532013001")

        with pytest.raises(ValidationError, match="IBAN"):
            Payment.create(replace(payment_input, debtor=debtor), now=fixed_time)

    def test_defaults_to_current_time(self, payment_input: CreatePaymentInput) -> None:
        before = datetime.now(UTC)

        payment = Payment.create(
            replace(payment_input, requested_execution_date=before.date() + timedelta(days=1))
        )

        assert before <= payment.creation_date_time <= datetime.now(UTC)


class TestPaymentConstructorInvariants:
    def test_constructor_rejects_empty_transfers(self, initiated_payment: Payment) -> None:
        with pytest.raises(ValidationError):
            replace(initiated_payment, credit_transfers=())

    def test_constructor_rejects_mixed_currencies(
        self,
        initiated_payment: Payment,
        transfer_input: CreateCreditTransferInput,
    ) -> None:
        usd = CreditTransfer.create(replace(transfer_input, currency="USD"))

        with pytest.raises(ValidationError):
            replace(initiated_payment, credit_transfers=(*initiated_payment.credit_transfers, usd))


# =============================================================================
# Computed Values
# =============================================================================


class TestPaymentComputedValues:
    def test_single_transfer(self, initiated_payment: Payment) -> None:
        assert initiated_payment.number_of_transactions == 1
        assert initiated_payment.control_sum == 1000
        assert initiated_payment.currency == "EUR"

    def test_control_sum_of_two_transfers(
        self, two_transfer_input: CreatePaymentInput, fixed_time: datetime
    ) -> None:
        payment = Payment.create(two_transfer_input, now=fixed_time)

        assert payment.number_of_transactions == 2
        assert payment.control_sum == 1500
        assert payment.total_amount.amount == 1500
        assert payment.total_amount == Money.create(1500, "EUR")

    def test_control_sum_is_exact_decimal(
        self,
        payment_input: CreatePaymentInput,
        transfer_input: CreateCreditTransferInput,
        fixed_time: datetime,
    ) -> None:
        transfers = [replace(transfer_input, amount=0.1), replace(transfer_input, amount=0.2)]

        payment = Payment.create(replace(payment_input, credit_transfers=transfers), now=fixed_time)

        assert payment.control_sum == Decimal("0.3")

    def test_total_above_eighteen_digits(
        self,
        payment_input: CreatePaymentInput,
        transfer_input: CreateCreditTransferInput,
        fixed_time: datetime,
    ) -> None:
        transfers = [
            replace(transfer_input, amount=999_999_999_999_999_999),
            replace(transfer_input, amount=1),
        ]

        payment = Payment.create(replace(payment_input, credit_transfers=transfers), now=fixed_time)

        assert payment.control_sum == Decimal("1000000000000000000")
        assert payment.total_amount.amount == payment.control_sum
        assert payment.domain_events[0].total_amount == payment.control_sum  # type: ignore[attr-defined]
        assert Payment.from_primitives(payment.to_primitives()).control_sum == payment.control_sum

    def test_credit_transfers_cannot_be_mutated(self, initiated_payment: Payment) -> None:
        transfers = initiated_payment.credit_transfers

        assert isinstance(transfers, tuple)
        with pytest.raises(AttributeError):
            transfers.append(transfers[0])  # type: ignore[attr-defined]

    def test_copy_of_transfers_does_not_affect_payment(self, initiated_payment: Payment) -> None:
        copied = list(initiated_payment.credit_transfers)
        copied.clear()

        assert initiated_payment.number_of_transactions == 1

    def test_list_input_is_not_shared(
        self, payment_input: CreatePaymentInput, fixed_time: datetime
    ) -> None:
        transfers = list(payment_input.credit_transfers)
        payment = Payment.create(replace(payment_input, credit_transfers=transfers), now=fixed_time)

        transfers.append(transfers[0])

        assert payment.number_of_transactions == 1

    def test_payment_is_frozen(self, initiated_payment: Payment) -> None:
        with pytest.raises(AttributeError):
            initiated_payment.status = PaymentStatus.SETTLED  # type: ignore[misc]


# =============================================================================
# Transitions
# =============================================================================


class TestMarkAsCleared:
    def test_initiated_to_cleared(self, initiated_payment: Payment) -> None:
        cleared = initiated_payment.mark_as_cleared("CLR-1")

        assert cleared.status == PaymentStatus.CLEARED
        assert cleared.id == initiated_payment.id

    def test_original_instance_is_unchanged(self, initiated_payment: Payment) -> None:
        initiated_payment.mark_as_cleared("CLR-1")

        assert initiated_payment.status == PaymentStatus.INITIATED
        assert len(initiated_payment.domain_events) == 1

    def test_raises_for_blank_reference(self, initiated_payment: Payment) -> None:
        with pytest.raises(ValidationError, match="Clearing reference") as exc_info:
            initiated_payment.mark_as_cleared("   ")

        assert exc_info.value.payload == {"clearingReference": "   "}

    def test_clearing_twice_raises(self, cleared_payment: Payment) -> None:
        with pytest.raises(InvalidTransitionError) as exc_info:
            cleared_payment.mark_as_cleared("CLR-2")

        assert exc_info.value.payload == {"currentStatus": "ACCC", "expectedStatus": "ACSP"}
        assert exc_info.value.kind is ErrorKind.INVALID_TRANSITION

    def test_status_guard_runs_before_reference_check(self, settled_payment: Payment) -> None:
        with pytest.raises(InvalidTransitionError):
            settled_payment.mark_as_cleared("")


class TestMarkAsSettled:
    def test_cleared_to_settled(self, cleared_payment: Payment, today: date) -> None:
        settled = cleared_payment.mark_as_settled(today)

        assert settled.status == PaymentStatus.SETTLED
        assert settled.settlement_date == today

    def test_settlement_datetime_is_truncated(self, cleared_payment: Payment, fixed_time: datetime) -> None:
        settled = cleared_payment.mark_as_settled(fixed_time)

        assert settled.settlement_date == fixed_time.date()

    def test_settling_before_clearing_raises(self, initiated_payment: Payment, today: date) -> None:
        with pytest.raises(InvalidTransitionError) as exc_info:
            initiated_payment.mark_as_settled(today)

        assert exc_info.value.current_status == "ACSP"
        assert exc_info.value.expected_status == "ACCC"

    def test_settling_twice_raises(self, settled_payment: Payment, today: date) -> None:
        with pytest.raises(InvalidTransitionError):
            settled_payment.mark_as_settled(today)

    def test_settling_rejected_raises(self, rejected_payment: Payment, today: date) -> None:
        with pytest.raises(InvalidTransitionError):
            rejected_payment.mark_as_settled(today)


class TestReject:
    def test_reject_from_initiated(self, initiated_payment: Payment) -> None:
        rejected = initiated_payment.reject("AM04")

        assert rejected.status == PaymentStatus.REJECTED
        assert rejected.rejection_reason == "AM04"

    def test_reject_from_cleared(self, cleared_payment: Payment) -> None:
        rejected = cleared_payment.reject("AC04")

        assert rejected.status == PaymentStatus.REJECTED

    def test_reject_from_settled_raises(self, settled_payment: Payment) -> None:
        with pytest.raises(InvalidTransitionError) as exc_info:
            settled_payment.reject("AC01")

        assert exc_info.value.payload == {"currentStatus": "ACSC"}

    def test_reject_twice_raises(self, rejected_payment: Payment) -> None:
        with pytest.raises(InvalidTransitionError):
            rejected_payment.reject("AC01")

    def test_raises_for_blank_reason(self, initiated_payment: Payment) -> None:
        with pytest.raises(ValidationError, match="reason code"):
            initiated_payment.reject("")

    def test_unlisted_reason_code_is_accepted(self, initiated_payment: Payment) -> None:
        assert initiated_payment.reject("ZZ99").rejection_reason == "ZZ99"


class TestTransitionQueries:
    def test_initiated_can_clear_or_reject(self, initiated_payment: Payment) -> None:
        assert initiated_payment.can_transition_to(PaymentStatus.CLEARED)
        assert initiated_payment.can_transition_to(PaymentStatus.REJECTED)
        assert not initiated_payment.can_transition_to(PaymentStatus.SETTLED)
        assert initiated_payment.is_terminal is False

    def test_cleared_can_settle_or_reject(self, cleared_payment: Payment) -> None:
        assert cleared_payment.can_transition_to(PaymentStatus.SETTLED)
        assert cleared_payment.can_transition_to(PaymentStatus.REJECTED)
        assert not cleared_payment.can_transition_to(PaymentStatus.CLEARED)

    def test_settled_and_rejected_are_terminal(
        self, settled_payment: Payment, rejected_payment: Payment
    ) -> None:
        for payment in (settled_payment, rejected_payment):
            assert payment.is_terminal is True
            assert not any(payment.can_transition_to(s) for s in PaymentStatus)


# =============================================================================
# Domain Events
# =============================================================================


class TestDomainEvents:
    def test_create_emits_one_initiated_event(
        self, two_transfer_input: CreatePaymentInput, fixed_time: datetime
    ) -> None:
        payment = Payment.create(two_transfer_input, now=fixed_time)

        assert len(payment.domain_events) == 1
        event = payment.domain_events[0]
        assert isinstance(event, PaymentInitiatedEvent)
        assert event.event_type == "payment.initiated"
        assert event.payment_id == str(payment.id)
        assert event.occurred_at == fixed_time
        assert event.debtor_name == "John Doe"
        assert event.total_amount == 1500
        assert event.currency == "EUR"
        assert event.number_of_transfers == 2

    def test_each_transition_appends_one_event(self, initiated_payment: Payment, today: date) -> None:
        cleared = initiated_payment.mark_as_cleared("CLR-9")
        settled = cleared.mark_as_settled(today)

        assert [type(e) for e in settled.domain_events] == [
            PaymentInitiatedEvent,
            PaymentClearedEvent,
            PaymentSettledEvent,
        ]
        assert settled.domain_events[1].clearing_reference == "CLR-9"  # type: ignore[attr-defined]
        assert settled.domain_events[2].settlement_date == today.isoformat()  # type: ignore[attr-defined]

    def test_reject_appends_rejected_event(self, initiated_payment: Payment) -> None:
        rejected = initiated_payment.clear_domain_events().reject("AG01")

        assert len(rejected.domain_events) == 1
        assert isinstance(rejected.domain_events[0], PaymentRejectedEvent)
        assert rejected.domain_events[0].reason_code == "AG01"

    def test_transition_event_uses_given_time(self, initiated_payment: Payment) -> None:
        at = datetime(2026, 3, 3, 8, 0, tzinfo=UTC)

        cleared = initiated_payment.mark_as_cleared("CLR", now=at)

        assert cleared.domain_events[-1].occurred_at == at

    def test_clear_domain_events_keeps_state(self, cleared_payment: Payment) -> None:
        drained = cleared_payment.clear_domain_events()

        assert drained.domain_events == ()
        assert drained.status == cleared_payment.status
        assert drained.to_primitives() == cleared_payment.to_primitives()

    def test_failed_transition_adds_no_event(self, initiated_payment: Payment) -> None:
        with pytest.raises(ValidationError):
            initiated_payment.mark_as_cleared("")

        assert len(initiated_payment.domain_events) == 1


# =============================================================================
# Serialization
# =============================================================================


class TestPaymentPrimitives:
    def test_to_primitives_shape(self, initiated_payment: Payment, fixed_time: datetime, today: date) -> None:
        primitives = initiated_payment.to_primitives()

        assert primitives["id"] == str(initiated_payment.id)
        assert primitives["messageId"] == initiated_payment.message_id
        assert primitives["creationDateTime"] == fixed_time.isoformat()
        assert primitives["status"] == "ACSP"
        assert primitives["serviceLevel"] == "SEPA"
        assert primitives["requestedExecutionDate"] == today.isoformat()
        assert primitives["debtor"] == {
            "name": "John Doe",
            "account": "DE89370400440532013000",
            "agent": "COBADEFFXXX",
            "country": "DE",
        }
        assert len(primitives["creditTransfers"]) == 1
        assert primitives["numberOfTransactions"] == 1
        assert primitives["controlSum"] == Decimal("1000")
        assert primitives["currency"] == "EUR"
        assert primitives["settlementDate"] is None
        assert primitives["rejectionReason"] is None

    @pytest.mark.parametrize(
        "fixture_name",
        ["initiated_payment", "cleared_payment", "settled_payment", "rejected_payment"],
    )
    def test_round_trip_is_idempotent(self, fixture_name: str, request: pytest.FixtureRequest) -> None:
        payment: Payment = request.getfixturevalue(fixture_name)
        primitives = payment.to_primitives()

        restored = Payment.from_primitives(primitives)

        assert restored.to_primitives() == primitives

    def test_rehydration_emits_no_event(self, initiated_payment: Payment) -> None:
        restored = Payment.from_primitives(initiated_payment.to_primitives())

        assert restored.domain_events == ()
        assert restored == initiated_payment.clear_domain_events()

    def test_rehydrates_past_execution_date(self, initiated_payment: Payment) -> None:
        primitives = initiated_payment.to_primitives()
        primitives["requestedExecutionDate"] = "2001-01-01"

        restored = Payment.from_primitives(primitives)

        assert restored.requested_execution_date == date(2001, 1, 1)

    def test_settled_primitives_carry_date(self, settled_payment: Payment, today: date) -> None:
        assert settled_payment.to_primitives()["settlementDate"] == today.isoformat()

    def test_from_primitives_raises_for_unknown_status(self, initiated_payment: Payment) -> None:
        primitives = initiated_payment.to_primitives()
        primitives["status"] = "DONE"

        with pytest.raises(ValidationError, match="status"):
            Payment.from_primitives(primitives)

    def test_from_primitives_raises_for_bad_date(self, initiated_payment: Payment) -> None:
        primitives = initiated_payment.to_primitives()
        primitives["requestedExecutionDate"] = "tomorrow"

        with pytest.raises(ValidationError, match="requestedExecutionDate"):
            Payment.from_primitives(primitives)

    def test_from_primitives_raises_for_empty_transfers(self, initiated_payment: Payment) -> None:
        primitives = initiated_payment.to_primitives()
        primitives["creditTransfers"] = []

        with pytest.raises(ValidationError, match="at least one"):
            Payment.from_primitives(primitives)
