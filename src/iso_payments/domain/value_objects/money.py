"""Money value object: amount + ISO 4217 currency.

The ISO 20022 amount type allows up to 18 digits in total (integer and
fraction digits together), e.g.::

    <IntrBkSttlmAmt Ccy="EUR">12500.00</IntrBkSttlmAmt>
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from iso_payments.domain.exceptions import ValidationError
from iso_payments.domain.value_objects.currency import Currency

MAX_ISO20022_DIGITS = 18
DECIMAL_PRECISION = Decimal("0.01")

AmountLike = Union[Decimal, int, float, str]


def _to_decimal(amount: AmountLike) -> Decimal:
    if isinstance(amount, bool):
        raise ValidationError("Amount must be a number.", {"amount": amount})
    try:
        # float goes through str so 0.1 stays 0.1 instead of its binary expansion
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValidationError("Amount must be a number.", {"amount": amount}) from e
    if not value.is_finite():
        raise ValidationError("Amount must be a finite number.", {"amount": amount})
    return value


def _digit_count(amount: Decimal) -> int:
    text = format(amount.normalize(), "f")
    return len(text.replace(".", ""))


@dataclass(frozen=True, slots=True)
class Money:
    """Immutable monetary amount.

    Invariants:
        - amount >= 0
        - at most 18 digits (ISO 20022 ceiling)
        - currency is a 3-letter ISO 4217 code (trimmed, uppercased)

    Arithmetic requires matching currencies and always returns a new instance.
    The digit ceiling is checked on construction only; add() may return a
    total above it.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        amount = _to_decimal(self.amount)

        if amount < 0:
            raise ValidationError("Amount cannot be negative.", {"amount": amount})

        if _digit_count(amount) > MAX_ISO20022_DIGITS:
            raise ValidationError(
                f"Amount exceeds ISO 20022 maximum of {MAX_ISO20022_DIGITS} digits.",
                {"amount": amount},
            )

        currency = Currency.create(self.currency).code

        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    @classmethod
    def create(cls, amount: AmountLike, currency: str) -> Money:
        """Factory method to create Money with validation.

        Raises:
            ValidationError: On negative amount, too many digits or a malformed
                currency code.
        """
        return cls(amount=amount, currency=currency)  # type: ignore[arg-type]

    @classmethod
    def zero(cls, currency: str) -> Money:
        return cls(amount=Decimal("0"), currency=currency)

    def add(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money._of_result(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount

        if result < 0:
            raise ValidationError(
                "Subtraction would result in negative amount.",
                {"left": self.amount, "right": other.amount},
            )

        return Money._of_result(result, self.currency)

    @classmethod
    def _of_result(cls, amount: Decimal, currency: str) -> Money:
        # operands were validated; skip __post_init__ for the arithmetic result
        money = object.__new__(cls)
        object.__setattr__(money, "amount", amount)
        object.__setattr__(money, "currency", currency)
        return money

    def __str__(self) -> str:
        return f"{self.currency} {self.amount.quantize(DECIMAL_PRECISION, rounding=ROUND_HALF_UP)}"

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                "Cannot operate on different currencies.",
                {"left": self.currency, "right": other.currency},
            )
