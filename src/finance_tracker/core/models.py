#!/usr/bin/env python3
"""
Core Data Models for the Finance Tracker

Immutable records for transactions, budgets, goals, accounts and the user
profile. Every record is validated when it is built from user input or from
stored dictionaries, so malformed values never reach the aggregation layer.
"""

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .dates import FinancialDate
from .errors import ValidationError
from .money import Money


class TransactionType(Enum):
    """Types of ledger transactions."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value: "TransactionType | str") -> "TransactionType":
        """Coerce a string into a TransactionType, raising ValidationError if unknown."""
        return _parse_enum(cls, value, "type")


class BudgetPeriod(Enum):
    """Budget period label. Display only; it does not window the spent total."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: "BudgetPeriod | str") -> "BudgetPeriod":
        return _parse_enum(cls, value, "period")


class AccountType(Enum):
    """Recognized account types."""

    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"
    INVESTMENT = "investment"


def generate_id() -> str:
    """Generate a new opaque record id. Ids are random and never reused."""
    return uuid.uuid4().hex


def _parse_enum(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(member.value for member in enum_cls)
    raise ValidationError(f"Invalid {field_name}: {value!r} (expected one of: {allowed})", field=field_name)


def _require_str(value: Any, field_name: str, allow_empty: bool = True) -> str:
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text, got {type(value).__name__}", field=field_name)
    if not allow_empty and not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return value


def _require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false", "yes", "no", "1", "0"):
        return value.strip().lower() in ("true", "yes", "1")
    raise ValidationError(f"{field_name} must be true or false, got {value!r}", field=field_name)


def _get(data: Mapping[str, Any], name: str, *aliases: str, default: Any = ...) -> Any:
    """Read a field by its snake_case name, falling back to camelCase aliases."""
    for key in (name, *aliases):
        if key in data:
            return data[key]
    if default is ...:
        raise ValidationError(f"Missing required field: {name}", field=name)
    return default


def _non_negative(amount: Any, field_name: str) -> Money:
    money = Money.from_amount(amount, field_name)
    if money.is_negative():
        raise ValidationError(f"{field_name} must not be negative, got {amount!r}", field=field_name)
    return money


def _positive(amount: Any, field_name: str) -> Money:
    money = Money.from_amount(amount, field_name)
    if money.cents <= 0:
        raise ValidationError(f"{field_name} must be greater than zero, got {amount!r}", field=field_name)
    return money


@dataclass(frozen=True)
class Transaction:
    """
    A single income or expense record in the ledger.

    Transactions are immutable. Editing a transaction replaces the whole
    record under the same id.
    """

    id: str
    type: TransactionType
    amount: Money
    category: str
    date: FinancialDate
    description: str = ""
    recurring: bool = False

    @classmethod
    def from_input(cls, txn_id: str, fields: Mapping[str, Any]) -> "Transaction":
        """
        Build a validated transaction from caller-supplied fields (everything but the id).

        Raises:
            ValidationError: If amount is not a finite non-negative number, the
                date is not a valid calendar date, or type is not income/expense
        """
        return cls(
            id=txn_id,
            type=TransactionType.parse(_get(fields, "type")),
            amount=_non_negative(_get(fields, "amount"), "amount"),
            category=_require_str(_get(fields, "category"), "category"),
            date=FinancialDate.parse(_get(fields, "date")),
            description=_require_str(_get(fields, "description", default=""), "description"),
            recurring=_require_bool(_get(fields, "recurring", default=False), "recurring"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transaction":
        """Create Transaction from a stored dictionary."""
        return cls.from_input(_require_str(_get(data, "id"), "id", allow_empty=False), data)

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "amount": str(self.amount),
            "category": self.category,
            "description": self.description,
            "date": self.date.to_iso_string(),
            "recurring": self.recurring,
        }


@dataclass(frozen=True)
class Budget:
    """
    Spending cap for one category.

    ``spent`` is derived: the sum of every expense transaction whose category
    exactly equals ``category``, over the whole ledger. It is never set by the
    user; the budget tracker recomputes it.
    """

    id: str
    category: str
    limit: Money
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    spent: Money = field(default_factory=Money.zero)

    @classmethod
    def from_input(cls, budget_id: str, fields: Mapping[str, Any]) -> "Budget":
        """Build a validated budget from caller-supplied fields. Any supplied ``spent`` is ignored."""
        return cls(
            id=budget_id,
            category=_require_str(_get(fields, "category"), "category", allow_empty=False),
            limit=_positive(_get(fields, "limit"), "limit"),
            period=BudgetPeriod.parse(_get(fields, "period", default=BudgetPeriod.MONTHLY.value)),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Budget":
        """Create Budget from a stored dictionary, keeping the cached spent value."""
        budget = cls.from_input(_require_str(_get(data, "id"), "id", allow_empty=False), data)
        spent = _get(data, "spent", default=None)
        if spent is not None:
            budget = replace(budget, spent=_non_negative(spent, "spent"))
        return budget

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "category": self.category,
            "limit": str(self.limit),
            "period": self.period.value,
            "spent": str(self.spent),
        }


@dataclass(frozen=True)
class Goal:
    """Savings target advanced by explicit contributions (not ledger transactions)."""

    id: str
    title: str
    target_amount: Money
    deadline: FinancialDate
    current_amount: Money = field(default_factory=Money.zero)
    category: str = ""

    @classmethod
    def from_input(cls, goal_id: str, fields: Mapping[str, Any]) -> "Goal":
        """Build a validated goal from caller-supplied fields."""
        return cls(
            id=goal_id,
            title=_require_str(_get(fields, "title"), "title", allow_empty=False),
            target_amount=_positive(_get(fields, "target_amount", "targetAmount"), "target_amount"),
            current_amount=_non_negative(
                _get(fields, "current_amount", "currentAmount", default=0), "current_amount"
            ),
            deadline=FinancialDate.parse(_get(fields, "deadline"), field="deadline"),
            category=_require_str(_get(fields, "category", default=""), "category"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Goal":
        """Create Goal from a stored dictionary."""
        return cls.from_input(_require_str(_get(data, "id"), "id", allow_empty=False), data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "target_amount": str(self.target_amount),
            "current_amount": str(self.current_amount),
            "deadline": self.deadline.to_iso_string(),
        }


@dataclass(frozen=True)
class Account:
    """
    Financial account with a user-maintained snapshot balance.

    Balances are signed: credit accounts carry negative balances for owed
    amounts. The balance is not derived from ledger transactions.
    """

    id: str
    name: str
    type: str
    balance: Money
    currency: str
    description: str = ""

    @classmethod
    def from_input(cls, account_id: str, fields: Mapping[str, Any], default_currency: str = "USD") -> "Account":
        """Build a validated account from caller-supplied fields."""
        account_type = _require_str(_get(fields, "type"), "type", allow_empty=False).strip().lower()
        currency = _require_str(_get(fields, "currency", default=default_currency), "currency")
        return cls(
            id=account_id,
            name=_require_str(_get(fields, "name"), "name", allow_empty=False),
            type=account_type,
            balance=Money.from_amount(_get(fields, "balance", default=0), "balance"),
            currency=currency.strip().upper() or default_currency,
            description=_require_str(_get(fields, "description", default=""), "description"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Account":
        """Create Account from a stored dictionary."""
        return cls.from_input(_require_str(_get(data, "id"), "id", allow_empty=False), data)

    @property
    def account_type(self) -> AccountType | None:
        """Recognized account type, or None for anything else."""
        try:
            return AccountType(self.type)
        except ValueError:
            return None

    @property
    def balance_display(self) -> str:
        """Get formatted balance with currency code."""
        return self.balance.format(self.currency)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "balance": str(self.balance),
            "currency": self.currency,
            "description": self.description,
        }


@dataclass(frozen=True)
class NotificationSettings:
    """Which notifications the user wants."""

    budget_alerts: bool = True
    goal_reminders: bool = True
    weekly_reports: bool = False
    monthly_reports: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NotificationSettings":
        return cls(
            budget_alerts=_require_bool(_get(data, "budget_alerts", "budgetAlerts", default=True), "budget_alerts"),
            goal_reminders=_require_bool(
                _get(data, "goal_reminders", "goalReminders", default=True), "goal_reminders"
            ),
            weekly_reports=_require_bool(
                _get(data, "weekly_reports", "weeklyReports", default=False), "weekly_reports"
            ),
            monthly_reports=_require_bool(
                _get(data, "monthly_reports", "monthlyReports", default=True), "monthly_reports"
            ),
        )

    def to_dict(self) -> dict[str, bool]:
        return {
            "budget_alerts": self.budget_alerts,
            "goal_reminders": self.goal_reminders,
            "weekly_reports": self.weekly_reports,
            "monthly_reports": self.monthly_reports,
        }


@dataclass(frozen=True)
class Profile:
    """User profile and preferences."""

    name: str = ""
    email: str = ""
    currency: str = "USD"
    notifications: NotificationSettings = field(default_factory=NotificationSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Profile":
        """Create Profile from a stored dictionary; missing fields keep their defaults."""
        notifications = _get(data, "notifications", default={})
        if not isinstance(notifications, Mapping):
            raise ValidationError("notifications must be a mapping", field="notifications")
        currency = _require_str(_get(data, "currency", default="USD"), "currency").strip().upper()
        return cls(
            name=_require_str(_get(data, "name", default=""), "name"),
            email=_require_str(_get(data, "email", default=""), "email"),
            currency=currency or "USD",
            notifications=NotificationSettings.from_dict(notifications),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "currency": self.currency,
            "notifications": self.notifications.to_dict(),
        }


# Type aliases for common data structures
TransactionList = list[Transaction]
BudgetList = list[Budget]
GoalList = list[Goal]
AccountList = list[Account]
