"""ISO 13616 International Bank Account Number.

Format: 2 letters (country) + 2 check digits + 4-30 alphanumerics (BBAN).
Example: FR7630006000011234567890189

Used in ISO 20022 within ``<DbtrAcct><Id><IBAN>`` and ``<CdtrAcct><Id><IBAN>``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from iso_payments.domain.exceptions import ValidationError

IBAN_FORMAT = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{4,30}$")
COUNTRY_CODE_END = 2
CHECK_DIGITS_END = 4
MOD_97_DIVISOR = 97
_WHITESPACE = re.compile(r"\s")


def is_checksum_valid(iban: str) -> bool:
    """ISO 7064 MOD 97-10 check.

    1. Move the first 4 characters to the end
    2. Replace each letter with two digits (A=10, B=11, ..., Z=35)
    3. The resulting integer mod 97 must equal 1
    """
    rearranged = iban[CHECK_DIGITS_END:] + iban[:CHECK_DIGITS_END]
    numeric = "".join(str(int(ch, 36)) for ch in rearranged)
    return int(numeric) % MOD_97_DIVISOR == 1


@dataclass(frozen=True, slots=True)
class Iban:
    value: str

    def __post_init__(self) -> None:
        cleaned = _WHITESPACE.sub("", self.value).upper()
        if cleaned != self.value:
            object.__setattr__(self, "value", cleaned)

        if not cleaned:
            raise ValidationError("IBAN cannot be empty.", {"value": cleaned})

        if not IBAN_FORMAT.match(cleaned):
            raise ValidationError("Invalid IBAN format (ISO 13616).", {"value": cleaned})

        if not is_checksum_valid(cleaned):
            raise ValidationError("Invalid IBAN checksum.", {"value": cleaned})

    @classmethod
    def create(cls, value: str) -> Iban:
        return cls(value=value)

    @property
    def country_code(self) -> str:
        return self.value[:COUNTRY_CODE_END]

    def __str__(self) -> str:
        return self.value
