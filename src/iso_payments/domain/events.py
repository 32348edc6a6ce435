"""Domain events for the payment lifecycle.

Each event records one transition. In ISO 20022 these are materialized by:
    - PaymentInitiatedEvent  → pain.001 sent to the bank
    - PaymentClearedEvent    → pacs.002 with <TxSts>ACCC
    - PaymentSettledEvent    → pacs.002 with <TxSts>ACSC
    - PaymentRejectedEvent   → pacs.002 with <TxSts>RJCT and <Rsn><Cd>

Events are queued on the aggregate and drained by the caller; the aggregate
never dispatches them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base record shared by all payment events."""

    event_type: ClassVar[str] = "payment.event"

    payment_id: str
    occurred_at: datetime

    def to_primitives(self) -> dict[str, Any]:
        return {
            "eventType": self.event_type,
            "paymentId": self.payment_id,
            "occurredAt": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class PaymentInitiatedEvent(DomainEvent):
    event_type: ClassVar[str] = "payment.initiated"

    debtor_name: str
    total_amount: Decimal
    currency: str
    number_of_transfers: int

    def to_primitives(self) -> dict[str, Any]:
        return {
            **DomainEvent.to_primitives(self),
            "debtorName": self.debtor_name,
            "totalAmount": self.total_amount,
            "currency": self.currency,
            "numberOfTransfers": self.number_of_transfers,
        }


@dataclass(frozen=True, slots=True)
class PaymentClearedEvent(DomainEvent):
    event_type: ClassVar[str] = "payment.cleared"

    clearing_reference: str

    def to_primitives(self) -> dict[str, Any]:
        return {**DomainEvent.to_primitives(self), "clearingReference": self.clearing_reference}


@dataclass(frozen=True, slots=True)
class PaymentSettledEvent(DomainEvent):
    event_type: ClassVar[str] = "payment.settled"

    settlement_date: str  # ISO-8601 date (<IntrBkSttlmDt>)

    def to_primitives(self) -> dict[str, Any]:
        return {**DomainEvent.to_primitives(self), "settlementDate": self.settlement_date}


@dataclass(frozen=True, slots=True)
class PaymentRejectedEvent(DomainEvent):
    event_type: ClassVar[str] = "payment.rejected"

    reason_code: str

    def to_primitives(self) -> dict[str, Any]:
        return {**DomainEvent.to_primitives(self), "reasonCode": self.reason_code}
