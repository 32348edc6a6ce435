"""Payment enumerations aligned with ISO 20022 code sets."""

from __future__ import annotations

from enum import Enum


class PaymentStatus(Enum):
    """Payment lifecycle status.

    Values are the ``<TxSts>`` codes of pacs.002 (PaymentStatusReport).
    """

    INITIATED = "ACSP"  # AcceptedSettlementInProcess
    PENDING = "PDNG"
    SCREENED = "ACWC"  # AcceptedWithChange
    CLEARED = "ACCC"  # AcceptedSettlementCompleted
    SETTLED = "ACSC"  # AcceptedSettlementCompletedCreditorAccount
    REJECTED = "RJCT"


class ServiceLevel(Enum):
    """ISO 20022 ``<PmtTpInf><SvcLvl><Cd>``."""

    SEPA = "SEPA"
    URGENT = "URGP"
    NORMAL = "NURG"
    SWIFT_GPI = "G001"
