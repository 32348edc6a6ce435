"""Party value object: a debtor or a creditor.

ISO 20022 data dictionary:
    <Dbtr> Debtor:   "Party that owes an amount of money to the Creditor"
    <Cdtr> Creditor: "Party to which an amount of money is due"

Both share one structure (name + account + agent), and identity is defined by
those attributes alone. Constraints: <Nm> max 140 characters, <Ctry> ISO 3166-1
alpha-2.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypedDict

from iso_payments.domain.exceptions import ValidationError
from iso_payments.domain.value_objects.bic import Bic
from iso_payments.domain.value_objects.iban import Iban

MAX_NAME_LENGTH = 140
COUNTRY_FORMAT = re.compile(r"^[A-Z]{2}$")


class PartyPrimitives(TypedDict):
    name: str
    account: str
    agent: str
    country: str


def _validated_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Party name is required.", {"name": cleaned})
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Party name cannot exceed {MAX_NAME_LENGTH} characters (ISO 20022).",
            {"name": cleaned},
        )
    return cleaned


def _validated_country(country: str) -> str:
    cleaned = country.strip().upper()
    if not COUNTRY_FORMAT.match(cleaned):
        raise ValidationError("Country must be ISO 3166-1 alpha-2.", {"country": cleaned})
    return cleaned


@dataclass(frozen=True, slots=True)
class Party:
    name: str
    account: Iban
    agent: Bic
    country: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _validated_name(self.name))
        object.__setattr__(self, "country", _validated_country(self.country))

        if not isinstance(self.account, Iban):
            raise ValidationError("Party account must be an IBAN.", {"account": self.account})
        if not isinstance(self.agent, Bic):
            raise ValidationError("Party agent must be a BIC.", {"agent": self.agent})

    @classmethod
    def create(cls, name: str, account: str, agent: str, country: str) -> Party:
        """Build a Party from raw strings.

        Checks run name → country → account → agent; the first failure is
        raised.

        Raises:
            ValidationError: If any of the four fields is invalid.
        """
        name = _validated_name(name)
        country = _validated_country(country)
        return cls(
            name=name,
            account=Iban.create(account),
            agent=Bic.create(agent),
            country=country,
        )

    @classmethod
    def from_primitives(cls, primitives: PartyPrimitives) -> Party:
        return cls.create(
            name=primitives["name"],
            account=primitives["account"],
            agent=primitives["agent"],
            country=primitives["country"],
        )

    def to_primitives(self) -> PartyPrimitives:
        return {
            "name": self.name,
            "account": str(self.account),
            "agent": str(self.agent),
            "country": self.country,
        }
