#!/usr/bin/env python3
"""Tests for core data models."""

import pytest

from finance_tracker.core.errors import ValidationError
from finance_tracker.core.models import (
    Account,
    AccountType,
    Budget,
    BudgetPeriod,
    Goal,
    Profile,
    Transaction,
    TransactionType,
    generate_id,
)
from finance_tracker.core.money import Money


@pytest.mark.unit
class TestTransaction:
    """Test Transaction validation and serialization."""

    def test_from_input(self):
        txn = Transaction.from_input(
            "t1",
            {"type": "Expense", "amount": "12.50", "category": "Food", "date": "2024-01-05"},
        )
        assert txn.type is TransactionType.EXPENSE
        assert txn.amount == Money.from_cents(1250)
        assert txn.description == ""
        assert txn.recurring is False
        assert txn.is_expense and not txn.is_income

    @pytest.mark.parametrize(
        "overrides",
        [
            {"amount": "-1"},
            {"amount": float("nan")},
            {"amount": "lots"},
            {"date": "2024-02-30"},
            {"type": "transfer"},
            {"recurring": "maybe"},
        ],
    )
    def test_rejects_malformed_fields(self, overrides):
        fields = {"type": "expense", "amount": "1.00", "category": "Food", "date": "2024-01-05", **overrides}
        with pytest.raises(ValidationError):
            Transaction.from_input("t1", fields)

    def test_missing_field(self):
        with pytest.raises(ValidationError, match="amount"):
            Transaction.from_input("t1", {"type": "income", "category": "Salary", "date": "2024-01-05"})

    def test_zero_amount_allowed(self):
        txn = Transaction.from_input("t1", {"type": "income", "amount": 0, "category": "X", "date": "2024-01-01"})
        assert txn.amount == Money.zero()

    def test_dict_round_trip(self):
        data = {
            "id": "t9",
            "type": "income",
            "amount": "2500.00",
            "category": "Salary",
            "description": "January",
            "date": "2024-01-31",
            "recurring": True,
        }
        assert Transaction.from_dict(data).to_dict() == data


@pytest.mark.unit
class TestBudget:
    """Test Budget validation."""

    def test_from_input_ignores_spent(self):
        budget = Budget.from_input("b1", {"category": "Food", "limit": 120, "spent": "999"})
        assert budget.spent == Money.zero()
        assert budget.period is BudgetPeriod.MONTHLY

    def test_from_dict_keeps_stored_spent(self):
        budget = Budget.from_dict({"id": "b1", "category": "Food", "limit": "120", "spent": "30.00"})
        assert budget.spent == Money.from_cents(3000)

    @pytest.mark.parametrize(
        "fields",
        [
            {"category": "Food", "limit": 0},
            {"category": "Food", "limit": "-5"},
            {"category": "", "limit": 10},
            {"category": "Food", "limit": 10, "period": "daily"},
        ],
    )
    def test_rejects_malformed_fields(self, fields):
        with pytest.raises(ValidationError):
            Budget.from_input("b1", fields)


@pytest.mark.unit
class TestGoal:
    """Test Goal validation."""

    def test_accepts_camel_case_aliases(self):
        goal = Goal.from_input(
            "g1", {"title": "Bike", "targetAmount": "800", "currentAmount": "50", "deadline": "2025-06-01"}
        )
        assert goal.target_amount == Money.from_cents(80000)
        assert goal.current_amount == Money.from_cents(5000)

    def test_rejects_negative_current_amount(self):
        with pytest.raises(ValidationError):
            Goal.from_input(
                "g1", {"title": "Bike", "target_amount": "800", "current_amount": "-1", "deadline": "2025-06-01"}
            )

    def test_rejects_non_positive_target(self):
        with pytest.raises(ValidationError):
            Goal.from_input("g1", {"title": "Bike", "target_amount": "0", "deadline": "2025-06-01"})


@pytest.mark.unit
class TestAccount:
    """Test Account validation."""

    def test_credit_balance_may_be_negative(self):
        account = Account.from_input("a1", {"name": "Visa", "type": "Credit", "balance": "-1500"})
        assert account.type == "credit"
        assert account.account_type is AccountType.CREDIT
        assert account.balance == Money.from_cents(-150000)
        assert account.currency == "USD"
        assert account.balance_display == "USD -1,500.00"

    def test_unrecognized_type_is_kept(self):
        account = Account.from_input("a1", {"name": "Coins", "type": "crypto", "balance": 10}, "eur")
        assert account.type == "crypto"
        assert account.account_type is None
        assert account.currency == "EUR"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Account.from_input("a1", {"name": "", "type": "checking"})


@pytest.mark.unit
class TestProfile:
    """Test Profile defaults."""

    def test_defaults(self):
        profile = Profile.from_dict({})
        assert profile.currency == "USD"
        assert profile.notifications.budget_alerts is True
        assert profile.notifications.weekly_reports is False

    def test_round_trip(self):
        profile = Profile.from_dict(
            {"name": "A", "email": "a@example.com", "currency": "sgd", "notifications": {"weeklyReports": True}}
        )
        assert profile.currency == "SGD"
        assert profile.notifications.weekly_reports is True
        assert Profile.from_dict(profile.to_dict()) == profile


@pytest.mark.unit
def test_generate_id_is_unique():
    ids = {generate_id() for _ in range(1000)}
    assert len(ids) == 1000
