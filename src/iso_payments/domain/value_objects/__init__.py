"""Value objects - Immutable objects defined by their attributes."""

from iso_payments.domain.value_objects.bic import Bic
from iso_payments.domain.value_objects.currency import Currency
from iso_payments.domain.value_objects.end_to_end_id import EndToEndId
from iso_payments.domain.value_objects.iban import Iban
from iso_payments.domain.value_objects.money import Money
from iso_payments.domain.value_objects.party import Party, PartyPrimitives
from iso_payments.domain.value_objects.uuid_v7 import Uuid

__all__ = [
    "Bic",
    "Currency",
    "EndToEndId",
    "Iban",
    "Money",
    "Party",
    "PartyPrimitives",
    "Uuid",
]
