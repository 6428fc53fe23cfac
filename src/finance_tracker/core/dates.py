#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable calendar date wrapper with consistent formatting for financial records.
Dates carry no time-of-day semantics.
"""

from dataclasses import dataclass
from datetime import date, datetime

from .errors import ValidationError


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object

        Raises:
            ValidationError: If the string is not a valid calendar date
        """
        try:
            return cls(date=datetime.strptime(date_str.strip(), date_format).date())
        except (ValueError, AttributeError) as e:
            raise ValidationError(f"Invalid date: {date_str!r}", field="date") from e

    @classmethod
    def parse(cls, value: "FinancialDate | date | str", field: str = "date") -> "FinancialDate":
        """
        Coerce user input into a FinancialDate.

        Accepts FinancialDate, datetime.date (a datetime is truncated to its date)
        or an ISO "YYYY-MM-DD" string.
        """
        if isinstance(value, FinancialDate):
            return value
        if isinstance(value, datetime):
            return cls(date=value.date())
        if isinstance(value, date):
            return cls(date=value)
        if isinstance(value, str):
            try:
                return cls.from_string(value)
            except ValidationError as e:
                raise ValidationError(f"Invalid {field}: {value!r} (expected YYYY-MM-DD)", field=field) from e
        raise ValidationError(f"Invalid {field}: {value!r}", field=field)

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def month_key(self) -> str:
        """Format as YYYY-MM for month bucketing."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    def age_days(self, other: "FinancialDate | None" = None) -> int:
        """
        Calculate days between this date and another (or today).

        Args:
            other: Other date to compare to (default: today)

        Returns:
            Number of days difference (positive when this date is in the past)
        """
        if other is None:
            other = FinancialDate.today()
        return (other.date - self.date).days

    def days_until(self, other: "FinancialDate | None" = None) -> int:
        """
        Calculate calendar days from another date (or today) until this date.

        Negative values mean this date has already passed.
        """
        return -self.age_days(other)

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, FinancialDate):
            return NotImplemented
        return self.date == other.date

    def __hash__(self) -> int:
        return hash(self.date)

    def __lt__(self, other: "FinancialDate") -> bool:
        """Less than comparison."""
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        """Less than or equal comparison."""
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        """Greater than comparison."""
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        """Greater than or equal comparison."""
        return self.date >= other.date

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"
