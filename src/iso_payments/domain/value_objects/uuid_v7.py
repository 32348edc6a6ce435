from __future__ import annotations

import os
import time
from dataclasses import dataclass
from uuid import UUID

from iso_payments.domain.exceptions import ValidationError

VERSION = 7
_TIMESTAMP_BITS = 48
_RANDOM_A_BITS = 12
_RANDOM_B_BITS = 62


@dataclass(frozen=True, slots=True)
class Uuid:
    """Value object for aggregate and entity identifiers.

    Identifiers are RFC 4122 UUID version 7 (time-ordered), so ids generated
    later sort after ids generated earlier.
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise ValidationError(f"Invalid UUID {VERSION} format", {"value": self.value})
        if self.value.version != VERSION:
            raise ValidationError(f"Invalid UUID {VERSION} format", {"value": str(self.value)})

    @classmethod
    def generate(cls) -> Uuid:
        """Generate a new time-ordered identifier.

        Layout: 48-bit unix epoch milliseconds, 4-bit version, 12 random bits,
        2-bit RFC 4122 variant, 62 random bits.
        """
        unix_ms = time.time_ns() // 1_000_000
        random_bits = int.from_bytes(os.urandom(10), "big")
        rand_a = random_bits >> (80 - _RANDOM_A_BITS)
        rand_b = random_bits & ((1 << _RANDOM_B_BITS) - 1)

        value = (unix_ms & ((1 << _TIMESTAMP_BITS) - 1)) << 80
        value |= VERSION << 76
        value |= rand_a << 64
        value |= 0b10 << 62
        value |= rand_b
        return cls(value=UUID(int=value))

    @classmethod
    def create(cls, value: str) -> Uuid:
        """Parse an identifier from its canonical string form.

        Raises:
            ValidationError: If the string is not a hyphenated UUID v7.
        """
        try:
            parsed = UUID(value)
        except (ValueError, AttributeError, TypeError) as e:
            raise ValidationError(f"Invalid UUID {VERSION} format", {"value": value}) from e
        if str(parsed) != value.strip().lower():
            raise ValidationError(f"Invalid UUID {VERSION} format", {"value": value})
        return cls(value=parsed)

    def __str__(self) -> str:
        return str(self.value)
