#!/usr/bin/env python3
"""
Amount Conversion and Formatting Utilities

All financial calculations use integer arithmetic to avoid floating-point errors.

Amount Systems:
- Internal calculations use minor units: 100 minor units = 1.00 of the currency
- User input arrives as int, float, Decimal or strings like "1,234.56"
- Display uses formatted strings: "1,234.56" or "SGD 1,234.56"

Key Principles:
- Never use floating-point arithmetic for amount calculations
- Convert every input through Decimal exactly once, at the boundary
- Reject NaN and infinity instead of propagating them into aggregates
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Union

from .errors import ValidationError

MINOR_UNITS_PER_UNIT = 100
_QUANTUM = Decimal("0.01")

AmountInput = Union[int, float, str, Decimal]


def to_decimal(value: AmountInput, field: str = "amount") -> Decimal:
    """
    Convert raw amount input to a finite Decimal.

    Args:
        value: Amount as int, float, Decimal, or a string like "$1,234.56"
        field: Field name used in error messages

    Returns:
        Finite Decimal value

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got {value!r}", field=field)

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, int):
            result = Decimal(value)
        elif isinstance(value, float):
            # repr() gives the shortest string that round-trips, so 0.1 stays 0.1
            result = Decimal(repr(value))
        elif isinstance(value, str):
            clean = value.replace("$", "").replace(",", "").strip()
            if not clean:
                raise ValidationError(f"{field} is required", field=field)
            result = Decimal(clean)
        else:
            raise ValidationError(f"{field} must be a number, got {type(value).__name__}", field=field)
    except InvalidOperation as e:
        raise ValidationError(f"{field} is not a valid number: {value!r}", field=field) from e

    if not result.is_finite():
        raise ValidationError(f"{field} must be finite, got {value!r}", field=field)
    return result


def to_minor_units(value: AmountInput, field: str = "amount") -> int:
    """
    Convert an amount to integer minor units, rounding half up to two places.

    Examples:
        to_minor_units("12.34") -> 1234
        to_minor_units(0.1) -> 10
        to_minor_units("-2,500") -> -250000
    """
    amount = to_decimal(value, field)
    try:
        quantized = amount.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        # More digits than the decimal context can hold at two places
        raise ValidationError(f"{field} is too large: {value!r}", field=field) from e
    return int(quantized * MINOR_UNITS_PER_UNIT)


def minor_units_to_decimal(minor_units: int) -> Decimal:
    """Convert minor units back to a two-place Decimal (1234 -> Decimal('12.34'))."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(str(abs(int(minor_units)))) + 2)
        return (Decimal(minor_units) / MINOR_UNITS_PER_UNIT).quantize(_QUANTUM)


def minor_units_to_str(minor_units: int, grouping: bool = False) -> str:
    """
    Convert minor units to a plain amount string using pure integer arithmetic.

    Example:
        minor_units_to_str(-123456) -> "-1234.56"
        minor_units_to_str(123456, grouping=True) -> "1,234.56"
    """
    is_negative = minor_units < 0
    abs_units = abs(int(minor_units))

    whole = abs_units // MINOR_UNITS_PER_UNIT
    remainder = abs_units % MINOR_UNITS_PER_UNIT

    whole_str = f"{whole:,}" if grouping else str(whole)
    sign = "-" if is_negative else ""
    return f"{sign}{whole_str}.{remainder:02d}"


def format_amount(minor_units: int, currency: str | None = None) -> str:
    """Format minor units for display, with an optional currency code prefix."""
    amount_str = minor_units_to_str(minor_units, grouping=True)
    if currency:
        return f"{currency} {amount_str}"
    return amount_str
