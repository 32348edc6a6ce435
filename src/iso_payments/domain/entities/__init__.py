"""Domain entities - Objects with identity and lifecycle."""

from iso_payments.domain.entities.credit_transfer import (
    CreateCreditTransferInput,
    CreditTransfer,
    CreditTransferPrimitives,
)
from iso_payments.domain.entities.payment import (
    CreatePaymentInput,
    DebtorInput,
    Payment,
    PaymentPrimitives,
)

__all__ = [
    "CreateCreditTransferInput",
    "CreatePaymentInput",
    "CreditTransfer",
    "CreditTransferPrimitives",
    "DebtorInput",
    "Payment",
    "PaymentPrimitives",
]
