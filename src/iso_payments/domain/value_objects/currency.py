from __future__ import annotations

import re
from dataclasses import dataclass

from iso_payments.domain.exceptions import ValidationError

CURRENCY_FORMAT = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True, slots=True)
class Currency:
    """ISO 4217 alphabetic currency code (e.g. EUR, USD)."""

    code: str

    def __post_init__(self) -> None:
        normalized = self.code.strip().upper() if isinstance(self.code, str) else self.code
        if normalized != self.code:
            object.__setattr__(self, "code", normalized)

        if not isinstance(normalized, str) or not CURRENCY_FORMAT.match(normalized):
            raise ValidationError("Invalid ISO 4217 currency code.", {"currency": self.code})

    @classmethod
    def create(cls, code: str) -> Currency:
        return cls(code=code)

    def __str__(self) -> str:
        return self.code
