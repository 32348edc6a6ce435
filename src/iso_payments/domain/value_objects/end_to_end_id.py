from __future__ import annotations

from dataclasses import dataclass

from iso_payments.domain.exceptions import ValidationError

MAX_LENGTH = 35
NOT_PROVIDED = "NOTPROVIDED"


@dataclass(frozen=True, slots=True)
class EndToEndId:
    """ISO 20022 ``<PmtId><EndToEndId>``.

    Assigned by the initiating party and passed on unchanged through the whole
    chain (pain.001 → pacs.008 → pacs.002). Mandatory, max 35 characters;
    "NOTPROVIDED" when the client did not supply one.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip()
        if normalized != self.value:
            object.__setattr__(self, "value", normalized)

        if not normalized:
            raise ValidationError("EndToEndId cannot be empty.", {"value": normalized})

        if len(normalized) > MAX_LENGTH:
            raise ValidationError(
                f"EndToEndId cannot exceed {MAX_LENGTH} characters (ISO 20022).",
                {"value": normalized},
            )

    @classmethod
    def create(cls, value: str) -> EndToEndId:
        return cls(value=value)

    @classmethod
    def not_provided(cls) -> EndToEndId:
        return cls(value=NOT_PROVIDED)

    @property
    def is_provided(self) -> bool:
        return self.value != NOT_PROVIDED

    def __str__(self) -> str:
        return self.value
