"""Exact decimal money type.

Every money field in ledgerkit is an ``Amount``. Values are held as
``Decimal`` quantized to the storage scale (4 places, matching the
``Numeric(19, 4)`` columns) so arithmetic never drifts the way binary floats
do. Display code asks for ``to_fixed(2)``.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Union

from ledgerkit.domain.errors import ValidationError

STORAGE_PLACES = 4
# Numeric(19, 4) leaves 15 integer digits
MAX_INTEGER_DIGITS = 15
_LIMIT = Decimal(10) ** MAX_INTEGER_DIGITS
_QUANTUM = Decimal(1).scaleb(-STORAGE_PLACES)

AmountLike = Union["Amount", Decimal, int, str]


@dataclass(frozen=True, order=True)
class Amount:
    """Immutable money value."""

    value: Decimal

    def __post_init__(self):
        if not isinstance(self.value, Decimal):
            raise TypeError(f"Amount requires a Decimal, got {type(self.value).__name__}")
        value = self.value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
        # No negative zero
        if value == 0:
            value = abs(value)
        object.__setattr__(self, "value", value)

    @classmethod
    def parse(cls, raw: AmountLike) -> "Amount":
        """Parse an amount from user, feed or database input.

        Handles "123.45", "$1,234.56", "-12", "(12.00)" (negative), and
        blank strings (zero). Floats, values with more than 4 decimal places
        and values too large for the storage column are refused.

        Raises:
            ValidationError: If the input cannot be parsed exactly
        """
        if isinstance(raw, Amount):
            return raw
        if isinstance(raw, bool) or isinstance(raw, float):
            raise ValidationError(f"Refusing inexact amount {raw!r}; pass a string or Decimal")
        if isinstance(raw, Decimal):
            if not raw.is_finite():
                raise ValidationError(f"Amount must be finite, got {raw}")
            return cls._checked(raw, raw)
        if isinstance(raw, int):
            return cls._checked(Decimal(raw), raw)
        if raw is None:
            return cls.zero()

        text = str(raw).strip()
        if not text:
            return cls.zero()

        negative = False
        if text.startswith("(") and text.endswith(")"):
            negative = True
            text = text[1:-1]
        text = re.sub(r"[$€£¥,\s]", "", text)

        try:
            value = Decimal(text)
        except InvalidOperation:
            raise ValidationError(f"Could not parse amount '{raw}'")
        if not value.is_finite():
            raise ValidationError(f"Amount must be finite, got '{raw}'")
        return cls._checked(-value if negative else value, raw)

    @classmethod
    def _checked(cls, value: Decimal, raw) -> "Amount":
        if abs(value) >= _LIMIT:
            raise ValidationError(f"Amount '{raw}' is too large (at most {MAX_INTEGER_DIGITS} integer digits)")
        if value != value.quantize(_QUANTUM):
            raise ValidationError(f"Amount '{raw}' has more than {STORAGE_PLACES} decimal places")
        return cls(value)

    @classmethod
    def zero(cls) -> "Amount":
        return cls(Decimal(0))

    @classmethod
    def sum(cls, amounts: Iterable["Amount"]) -> "Amount":
        total = cls.zero()
        for amount in amounts:
            total = total + amount
        return total

    def add(self, other: AmountLike) -> "Amount":
        return Amount(self.value + Amount.parse(other).value)

    def subtract(self, other: AmountLike) -> "Amount":
        return Amount(self.value - Amount.parse(other).value)

    __add__ = add
    __sub__ = subtract

    def __neg__(self) -> "Amount":
        return self.negate()

    def negate(self) -> "Amount":
        return Amount(-self.value)

    def abs(self) -> "Amount":
        return Amount(abs(self.value))

    def is_zero(self) -> bool:
        return self.value == 0

    def is_positive(self) -> bool:
        return self.value > 0

    def is_negative(self) -> bool:
        return self.value < 0

    def compare(self, other: AmountLike) -> int:
        """Return -1, 0 or 1 as self is less than, equal to, or greater than other."""
        other_value = Amount.parse(other).value
        if self.value < other_value:
            return -1
        if self.value > other_value:
            return 1
        return 0

    def to_fixed(self, places: int = 2) -> str:
        """Format with a fixed number of decimal places (half-up rounding)."""
        quantum = Decimal(1).scaleb(-places)
        return f"{self.value.quantize(quantum, rounding=ROUND_HALF_UP):f}"

    def to_decimal(self) -> Decimal:
        return self.value

    def __str__(self) -> str:
        return self.to_fixed(2)

    def __repr__(self) -> str:
        return f"Amount('{self.value}')"
