"""CreditTransfer entity: one transaction line within a payment.

ISO 20022 ``<CdtTrfTxInf>`` (CreditTransferTransactionInformation). A Payment
holds 1..N of these; each has its own EndToEndId, amount and creditor while
the debtor is shared at Payment level. Unstructured remittance information
(``<RmtInf><Ustrd>``) is limited to 140 characters.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, TypedDict

from iso_payments.domain.exceptions import ValidationError
from iso_payments.domain.value_objects import EndToEndId, Money, Party, Uuid

if TYPE_CHECKING:
    from iso_payments.domain.value_objects import PartyPrimitives
    from iso_payments.domain.value_objects.money import AmountLike

MAX_REMITTANCE_LENGTH = 140


class CreditTransferPrimitives(TypedDict):
    id: str
    endToEndId: str
    amount: Decimal
    currency: str
    creditor: PartyPrimitives
    remittanceInfo: str | None


@dataclass(frozen=True, slots=True)
class CreateCreditTransferInput:
    """Input DTO for a new credit transfer.

    ``end_to_end_id=None`` means the client supplied none; the transfer then
    carries the "NOTPROVIDED" sentinel.
    """

    amount: AmountLike
    currency: str
    creditor_name: str
    creditor_iban: str
    creditor_bic: str
    creditor_country: str
    end_to_end_id: str | None
    remittance_info: str | None = None


def _validate_remittance_info(remittance_info: str | None) -> None:
    if remittance_info is not None and len(remittance_info) > MAX_REMITTANCE_LENGTH:
        raise ValidationError(
            f"Remittance info cannot exceed {MAX_REMITTANCE_LENGTH} characters (ISO 20022).",
            {"remittanceInfo": remittance_info},
        )


@dataclass(frozen=True, slots=True)
class CreditTransfer:
    """Entity identified by its own Uuid.

    Use create() for new transfers and from_primitives() for rehydration.
    """

    id: Uuid
    end_to_end_id: EndToEndId
    amount: Money
    creditor: Party
    remittance_info: str | None

    def __post_init__(self) -> None:
        _validate_remittance_info(self.remittance_info)

    @classmethod
    def create(cls, data: CreateCreditTransferInput) -> CreditTransfer:
        """Factory method to create a CreditTransfer with a fresh id.

        Remittance info is checked before the nested value objects are built.

        Raises:
            ValidationError: If any field fails validation.
        """
        _validate_remittance_info(data.remittance_info)

        end_to_end_id = (
            EndToEndId.not_provided()
            if data.end_to_end_id is None
            else EndToEndId.create(data.end_to_end_id)
        )

        return cls(
            id=Uuid.generate(),
            end_to_end_id=end_to_end_id,
            amount=Money.create(data.amount, data.currency),
            creditor=Party.create(
                name=data.creditor_name,
                account=data.creditor_iban,
                agent=data.creditor_bic,
                country=data.creditor_country,
            ),
            remittance_info=data.remittance_info,
        )

    @classmethod
    def from_primitives(cls, primitives: CreditTransferPrimitives) -> CreditTransfer:
        """Rebuild a stored transfer, keeping its id."""
        return cls(
            id=Uuid.create(primitives["id"]),
            end_to_end_id=EndToEndId.create(primitives["endToEndId"]),
            amount=Money.create(primitives["amount"], primitives["currency"]),
            creditor=Party.from_primitives(primitives["creditor"]),
            remittance_info=primitives["remittanceInfo"],
        )

    def to_primitives(self) -> CreditTransferPrimitives:
        return {
            "id": str(self.id),
            "endToEndId": str(self.end_to_end_id),
            "amount": self.amount.amount,
            "currency": self.amount.currency,
            "creditor": self.creditor.to_primitives(),
            "remittanceInfo": self.remittance_info,
        }
