#!/usr/bin/env python3
"""
Money Primitive Type

Immutable amount wrapper that uses integer minor units internally.
Prevents floating-point errors and provides type-safe amount operations.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    AmountInput,
    format_amount,
    minor_units_to_decimal,
    minor_units_to_str,
    to_minor_units,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable, currency-agnostic amount in minor units (1/100 of a unit).

    Supports both positive and negative amounts. Negative values appear for
    account balances that represent owed amounts (credit cards).

    Examples:
        >>> salary = Money.from_amount("5000")
        >>> str(salary)
        '5000.00'

        >>> card = Money.from_cents(-250000)
        >>> str(salary + card)
        '2500.00'

        >>> card.abs()
        Money(cents=250000)
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """Create a zero amount."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from minor units."""
        return cls(cents=cents)

    @classmethod
    def from_amount(cls, amount: AmountInput, field: str = "amount") -> "Money":
        """
        Parse from a user-supplied amount.

        Args:
            amount: int, float, Decimal or string like "1,234.56"
            field: Field name used in validation errors

        Returns:
            Money object rounded half up to two decimal places

        Raises:
            ValidationError: If the amount is not a finite number
        """
        return cls(cents=to_minor_units(amount, field))

    @classmethod
    def sum(cls, amounts) -> "Money":
        """Sum an iterable of Money values; empty input gives zero."""
        return cls(cents=sum(m.cents for m in amounts))

    def to_cents(self) -> int:
        """Get value in minor units."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value as a two-place Decimal."""
        return minor_units_to_decimal(self.cents)

    def format(self, currency: str | None = None) -> str:
        """Get display string with thousands grouping and optional currency code."""
        return format_amount(self.cents, currency)

    def is_negative(self) -> bool:
        """Check whether the amount is below zero."""
        return self.cents < 0

    def abs(self) -> "Money":
        """
        Return absolute value of Money.

        Useful for display purposes when sign doesn't matter.
        """
        return Money(cents=abs(self.cents))

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __neg__(self) -> "Money":
        """Negate the amount."""
        return Money(cents=-self.cents)

    def __bool__(self) -> bool:
        """Zero is falsy."""
        return self.cents != 0

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __hash__(self) -> int:
        return hash(self.cents)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as plain amount string."""
        return minor_units_to_str(self.cents)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"
