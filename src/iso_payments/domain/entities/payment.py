"""Payment aggregate root with state machine behavior.

Corresponds to the ISO 20022 pain.001 message (CustomerCreditTransferInitiation)::

    <CstmrCdtTrfInitn>
      <GrpHdr>        → message_id, creation_date_time, number_of_transactions, control_sum
      <PmtInf>        → debtor, service_level, requested_execution_date
        <CdtTrfTxInf> → credit_transfers

Status updates mirror the pacs.002 status report codes (ACCC / ACSC / RJCT).
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, TypedDict

from iso_payments.domain.entities.credit_transfer import (
    CreateCreditTransferInput,
    CreditTransfer,
    CreditTransferPrimitives,
)
from iso_payments.domain.enums import PaymentStatus, ServiceLevel
from iso_payments.domain.events import (
    DomainEvent,
    PaymentClearedEvent,
    PaymentInitiatedEvent,
    PaymentRejectedEvent,
    PaymentSettledEvent,
)
from iso_payments.domain.exceptions import InvalidTransitionError, ValidationError
from iso_payments.domain.value_objects import Money, Party, Uuid

if TYPE_CHECKING:
    from collections.abc import Sequence
    from enum import Enum

    from iso_payments.domain.value_objects import PartyPrimitives

MESSAGE_ID_PREFIX = "MSG"
MESSAGE_ID_RANDOM_LENGTH = 8
_BASE36_ALPHABET = string.digits + string.ascii_lowercase

# Legal transitions. PENDING and SCREENED are reported by banks but never entered here.
_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.INITIATED: frozenset({PaymentStatus.CLEARED, PaymentStatus.REJECTED}),
    PaymentStatus.CLEARED: frozenset({PaymentStatus.SETTLED, PaymentStatus.REJECTED}),
}
_REJECTABLE_STATUSES = (PaymentStatus.INITIATED, PaymentStatus.CLEARED)
_TERMINAL_STATUSES = frozenset({PaymentStatus.SETTLED, PaymentStatus.REJECTED})


class PaymentPrimitives(TypedDict):
    id: str
    messageId: str
    creationDateTime: str
    status: str
    serviceLevel: str
    requestedExecutionDate: str
    debtor: PartyPrimitives
    creditTransfers: list[CreditTransferPrimitives]
    numberOfTransactions: int
    controlSum: Decimal
    currency: str
    settlementDate: str | None
    rejectionReason: str | None


@dataclass(frozen=True, slots=True)
class DebtorInput:
    name: str
    iban: str
    bic: str
    country: str


@dataclass(frozen=True, slots=True)
class CreatePaymentInput:
    """Input DTO for Payment.create()."""

    credit_transfers: Sequence[CreateCreditTransferInput]
    debtor: DebtorInput
    requested_execution_date: date
    service_level: ServiceLevel | str


def _as_date(value: date) -> date:
    # datetime is a subclass of date; execution and settlement dates are date-only
    if isinstance(value, datetime):
        return value.date()
    return value


def _parse_enum(enum_cls: type[Enum], value: Any, field: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field}.", {field: value}) from e


def _parse_iso_date(value: str, field: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid ISO-8601 date for {field}.", {field: value}) from e


def _generate_message_id(now: datetime) -> str:
    """Build ``MSG-<epoch-ms>-<8 random base36 chars>``."""
    timestamp_ms = int(now.timestamp() * 1000)
    suffix = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(MESSAGE_ID_RANDOM_LENGTH))
    return f"{MESSAGE_ID_PREFIX}-{timestamp_ms}-{suffix}"


@dataclass(frozen=True, slots=True)
class Payment:
    """Payment aggregate root.

    Invariants (checked on every construction path):
        1. At least one credit transfer
        2. All credit transfers share one currency
    Checked by create() only:
        3. requested_execution_date is not before the business date
    Enforced by the transition methods:
        4. initiated → cleared → settled, with rejected reachable from
           initiated or cleared; settled and rejected are terminal

    Payment is immutable. Every transition returns a new Payment carrying the
    previous pending events plus exactly one new event. Callers drain
    ``domain_events`` and then call clear_domain_events().
    """

    id: Uuid
    message_id: str
    creation_date_time: datetime
    status: PaymentStatus
    service_level: ServiceLevel
    requested_execution_date: date
    debtor: Party
    credit_transfers: tuple[CreditTransfer, ...]
    settlement_date: date | None = None
    rejection_reason: str | None = None
    domain_events: tuple[DomainEvent, ...] = ()

    def __post_init__(self) -> None:
        transfers = tuple(self.credit_transfers)
        object.__setattr__(self, "credit_transfers", transfers)
        object.__setattr__(self, "domain_events", tuple(self.domain_events))

        if not transfers:
            raise ValidationError("A payment must contain at least one credit transfer.", {})

        currencies = {ct.amount.currency for ct in transfers}
        if len(currencies) > 1:
            raise ValidationError(
                "All credit transfers in a payment must use the same currency.",
                {"currencies": sorted(currencies)},
            )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        data: CreatePaymentInput,
        *,
        now: datetime | None = None,
        business_date: date | None = None,
    ) -> Payment:
        """Initiate a new payment.

        Args:
            data: Debtor, credit transfers, execution date and service level.
            now: Creation timestamp (UTC). Defaults to the current time.
            business_date: "Today" for the execution date check. Defaults to
                ``now.date()``.

        Returns:
            A Payment in INITIATED status with one PaymentInitiatedEvent queued.

        Raises:
            ValidationError: No transfers, execution date in the past, mixed
                currencies, or any invalid nested field.
        """
        now = now or datetime.now(UTC)
        today = business_date or now.date()

        if not data.credit_transfers:
            raise ValidationError("A payment must contain at least one credit transfer.", {})

        requested_execution_date = _as_date(data.requested_execution_date)
        if requested_execution_date < today:
            raise ValidationError(
                "Requested execution date cannot be in the past.",
                {"requestedExecutionDate": requested_execution_date.isoformat()},
            )

        credit_transfers = tuple(CreditTransfer.create(ct) for ct in data.credit_transfers)

        currencies = {ct.amount.currency for ct in credit_transfers}
        if len(currencies) > 1:
            raise ValidationError(
                "All credit transfers in a payment must use the same currency.",
                {"currencies": sorted(currencies)},
            )

        payment = cls(
            id=Uuid.generate(),
            message_id=_generate_message_id(now),
            creation_date_time=now,
            status=PaymentStatus.INITIATED,
            service_level=_parse_enum(ServiceLevel, data.service_level, "serviceLevel"),
            requested_execution_date=requested_execution_date,
            debtor=Party.create(
                name=data.debtor.name,
                account=data.debtor.iban,
                agent=data.debtor.bic,
                country=data.debtor.country,
            ),
            credit_transfers=credit_transfers,
        )

        event = PaymentInitiatedEvent(
            payment_id=str(payment.id),
            occurred_at=now,
            debtor_name=payment.debtor.name,
            total_amount=payment.control_sum,
            currency=payment.currency,
            number_of_transfers=payment.number_of_transactions,
        )
        return replace(payment, domain_events=(event,))

    @classmethod
    def from_primitives(cls, primitives: PaymentPrimitives) -> Payment:
        """Rehydrate a stored payment. No event is emitted."""
        settlement_date = primitives["settlementDate"]
        try:
            creation_date_time = datetime.fromisoformat(primitives["creationDateTime"])
        except (TypeError, ValueError) as e:
            raise ValidationError(
                "Invalid ISO-8601 timestamp for creationDateTime.",
                {"creationDateTime": primitives["creationDateTime"]},
            ) from e

        return cls(
            id=Uuid.create(primitives["id"]),
            message_id=primitives["messageId"],
            creation_date_time=creation_date_time,
            status=_parse_enum(PaymentStatus, primitives["status"], "status"),
            service_level=_parse_enum(ServiceLevel, primitives["serviceLevel"], "serviceLevel"),
            requested_execution_date=_parse_iso_date(
                primitives["requestedExecutionDate"], "requestedExecutionDate"
            ),
            debtor=Party.from_primitives(primitives["debtor"]),
            credit_transfers=tuple(
                CreditTransfer.from_primitives(ct) for ct in primitives["creditTransfers"]
            ),
            settlement_date=(
                _parse_iso_date(settlement_date, "settlementDate") if settlement_date else None
            ),
            rejection_reason=primitives["rejectionReason"],
        )

    # ------------------------------------------------------------------
    # Computed (never stored)
    # ------------------------------------------------------------------

    @property
    def number_of_transactions(self) -> int:
        """ISO 20022 ``<NbOfTxs>``."""
        return len(self.credit_transfers)

    @property
    def control_sum(self) -> Decimal:
        """ISO 20022 ``<CtrlSum>``: total of all amounts.

        Used as an integrity check; a transfer lost in transit breaks it.
        """
        return sum((ct.amount.amount for ct in self.credit_transfers), Decimal("0"))

    @property
    def currency(self) -> str:
        if not self.credit_transfers:
            raise ValidationError("Payment must contain at least one credit transfer.", {})
        return self.credit_transfers[0].amount.currency

    @property
    def total_amount(self) -> Money:
        total = Money.zero(self.currency)
        for ct in self.credit_transfers:
            total = total.add(ct.amount)
        return total

    @property
    def is_terminal(self) -> bool:
        return self.status in _TERMINAL_STATUSES

    def can_transition_to(self, status: PaymentStatus) -> bool:
        return status in _TRANSITIONS.get(self.status, frozenset())

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def mark_as_cleared(self, clearing_reference: str, *, now: datetime | None = None) -> Payment:
        """Record interbank clearing (pacs.002 ``<TxSts>ACCC``).

        Args:
            clearing_reference: Identifies the operation in the clearing system.
            now: Event timestamp (UTC). Defaults to the current time.

        Returns:
            New Payment instance in CLEARED status.

        Raises:
            InvalidTransitionError: If not in INITIATED status.
            ValidationError: If the reference is blank.
        """
        self._assert_status(PaymentStatus.INITIATED, "clear")

        if not clearing_reference.strip():
            raise ValidationError(
                "Clearing reference is required.", {"clearingReference": clearing_reference}
            )

        event = PaymentClearedEvent(
            payment_id=str(self.id),
            occurred_at=now or datetime.now(UTC),
            clearing_reference=clearing_reference,
        )
        return self._with_event(event, status=PaymentStatus.CLEARED)

    def mark_as_settled(self, settlement_date: date, *, now: datetime | None = None) -> Payment:
        """Record settlement on the creditor account (pacs.002 ``<TxSts>ACSC``).

        Raises:
            InvalidTransitionError: If not in CLEARED status.
        """
        self._assert_status(PaymentStatus.CLEARED, "settle")

        settlement_date = _as_date(settlement_date)
        event = PaymentSettledEvent(
            payment_id=str(self.id),
            occurred_at=now or datetime.now(UTC),
            settlement_date=settlement_date.isoformat(),
        )
        return self._with_event(
            event, status=PaymentStatus.SETTLED, settlement_date=settlement_date
        )

    def reject(self, reason_code: str, *, now: datetime | None = None) -> Payment:
        """Reject the payment (pacs.002 ``<TxSts>RJCT`` with ``<Rsn><Cd>``).

        Reason codes such as AC01 (IncorrectAccountNumber), AC04
        (ClosedAccountNumber) or AM04 (InsufficientFunds) are accepted as
        given; only blank codes are refused.

        Raises:
            InvalidTransitionError: If not in INITIATED or CLEARED status.
            ValidationError: If the reason code is blank.
        """
        if self.status not in _REJECTABLE_STATUSES:
            raise InvalidTransitionError(
                f'Cannot reject payment in status "{self.status.value}".',
                current_status=self.status.value,
            )

        if not reason_code.strip():
            raise ValidationError("Rejection reason code is required.", {"reasonCode": reason_code})

        event = PaymentRejectedEvent(
            payment_id=str(self.id),
            occurred_at=now or datetime.now(UTC),
            reason_code=reason_code,
        )
        return self._with_event(event, status=PaymentStatus.REJECTED, rejection_reason=reason_code)

    def clear_domain_events(self) -> Payment:
        """Return the same payment state with an empty event queue."""
        return replace(self, domain_events=())

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_primitives(self) -> PaymentPrimitives:
        return {
            "id": str(self.id),
            "messageId": self.message_id,
            "creationDateTime": self.creation_date_time.isoformat(),
            "status": self.status.value,
            "serviceLevel": self.service_level.value,
            "requestedExecutionDate": self.requested_execution_date.isoformat(),
            "debtor": self.debtor.to_primitives(),
            "creditTransfers": [ct.to_primitives() for ct in self.credit_transfers],
            "numberOfTransactions": self.number_of_transactions,
            "controlSum": self.control_sum,
            "currency": self.currency,
            "settlementDate": self.settlement_date.isoformat() if self.settlement_date else None,
            "rejectionReason": self.rejection_reason,
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _assert_status(self, expected: PaymentStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidTransitionError(
                f'Cannot {action} payment in status "{self.status.value}" '
                f'(expected "{expected.value}").',
                current_status=self.status.value,
                expected_status=expected.value,
            )

    def _with_event(self, event: DomainEvent, **changes: Any) -> Payment:
        return replace(self, domain_events=(*self.domain_events, event), **changes)
