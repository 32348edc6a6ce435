"""ISO 9362 Business Identifier Code (BIC / SWIFT code).

Format: AAAA BB CC (DDD)
    - AAAA : institution code (4 letters)
    - BB   : ISO 3166-1 country code (2 letters)
    - CC   : location code (2 alphanumerics)
    - DDD  : optional branch code (3 alphanumerics, "XXX" = head office)

Example: BNPAFRPP (BNP Paribas, France, Paris)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from iso_payments.domain.exceptions import ValidationError

BIC_FORMAT = re.compile(r"^[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?$")
INSTITUTION_CODE_END = 4
COUNTRY_CODE_START = 4
COUNTRY_CODE_END = 6
BRANCH_CODE_START = 8
HEAD_OFFICE_BRANCH = "XXX"


@dataclass(frozen=True, slots=True)
class Bic:
    value: str

    def __post_init__(self) -> None:
        cleaned = self.value.strip().upper()
        if cleaned != self.value:
            object.__setattr__(self, "value", cleaned)

        if not cleaned:
            raise ValidationError("BIC cannot be empty.", {"value": cleaned})

        if not BIC_FORMAT.match(cleaned):
            raise ValidationError("Invalid BIC format (ISO 9362).", {"value": cleaned})

    @classmethod
    def create(cls, value: str) -> Bic:
        return cls(value=value)

    @property
    def institution_code(self) -> str:
        return self.value[:INSTITUTION_CODE_END]

    @property
    def country_code(self) -> str:
        return self.value[COUNTRY_CODE_START:COUNTRY_CODE_END]

    @property
    def branch_code(self) -> str:
        """Branch code; 8-character BICs address the head office."""
        return self.value[BRANCH_CODE_START:] or HEAD_OFFICE_BRANCH

    @property
    def is_head_office(self) -> bool:
        return self.branch_code == HEAD_OFFICE_BRANCH

    def __str__(self) -> str:
        return self.value
