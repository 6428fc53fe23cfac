#!/usr/bin/env python3
"""Tests for budget status, recomputation and the BudgetTracker."""

import pytest

from finance_tracker.budgets import BudgetStatus, BudgetTracker, budget_status, recompute
from finance_tracker.core.config import BudgetConfig
from finance_tracker.core.errors import NotFoundError, ValidationError
from finance_tracker.core.models import Budget, Transaction
from finance_tracker.core.money import Money


def _expense(txn_id, amount, category="Food", txn_type="expense"):
    return Transaction.from_input(
        txn_id, {"type": txn_type, "amount": amount, "category": category, "date": "2024-01-05"}
    )


@pytest.mark.budgets
class TestBudgetStatus:
    """Test status thresholds."""

    @pytest.mark.parametrize(
        "spent,expected",
        [
            ("0", BudgetStatus.GOOD),
            ("79.99", BudgetStatus.GOOD),
            ("80", BudgetStatus.WARNING),
            ("99.99", BudgetStatus.WARNING),
            ("100", BudgetStatus.OVER),
            ("250", BudgetStatus.OVER),
        ],
    )
    def test_thresholds(self, spent, expected):
        budget = Budget(id="b1", category="Food", limit=Money.from_amount(100), spent=Money.from_amount(spent))
        assert budget_status(budget) is expected

    def test_custom_thresholds(self):
        budget = Budget(id="b1", category="Food", limit=Money.from_amount(100), spent=Money.from_amount(60))
        assert budget_status(budget, BudgetConfig(warning_percent=50, over_percent=90)) is BudgetStatus.WARNING


@pytest.mark.budgets
class TestRecompute:
    """Test the pure recompute function."""

    def test_only_matching_expenses_count(self):
        budget = Budget.from_input("b1", {"category": "Food", "limit": 100})
        txns = [
            _expense("1", 30),
            _expense("2", 20),
            _expense("3", 99, category="food"),
            _expense("4", 500, txn_type="income"),
        ]
        assert recompute(budget, txns).spent == Money.from_amount(50)

    def test_idempotent(self):
        budget = Budget.from_input("b1", {"category": "Food", "limit": 100})
        txns = [_expense("1", 30)]
        once = recompute(budget, txns)
        assert recompute(once, txns) is once

    def test_empty_ledger(self):
        budget = Budget(id="b1", category="Food", limit=Money.from_amount(100), spent=Money.from_amount(40))
        assert recompute(budget, []).spent == Money.zero()


@pytest.mark.budgets
class TestBudgetTracker:
    """Test BudgetTracker mutations and notifications."""

    def setup_method(self):
        self.tracker = BudgetTracker()
        self.events = []
        self.tracker.subscribe(self.events.append)

    def test_add_computes_spent_from_history(self):
        budget, changes = self.tracker.add({"category": "Food", "limit": 120}, [_expense("1", 150)])
        assert budget.spent == Money.from_amount(150)
        assert self.tracker.status(budget) is BudgetStatus.OVER
        assert changes[0].previous is None
        assert changes[0].current is BudgetStatus.OVER

    def test_recompute_all_reports_transitions(self):
        budget, _ = self.tracker.add({"category": "Food", "limit": 100}, [])
        changes = self.tracker.recompute_all([_expense("1", 85)])
        assert [(c.previous, c.current) for c in changes] == [(BudgetStatus.GOOD, BudgetStatus.WARNING)]
        assert self.tracker.get(budget.id).spent == Money.from_amount(85)

    def test_recompute_all_without_transition_is_silent(self):
        self.tracker.add({"category": "Food", "limit": 100}, [])
        assert self.tracker.recompute_all([_expense("1", 10)]) == []

    def test_notify_delivers_to_subscribers(self):
        _, changes = self.tracker.add({"category": "Food", "limit": 100}, [])
        self.tracker.notify(changes)
        assert self.events == changes
        self.tracker.unsubscribe(self.events.append)
        self.tracker.notify(changes)
        assert len(self.events) == 1

    def test_edit_category_recomputes(self):
        budget, _ = self.tracker.add({"category": "Food", "limit": 100}, [])
        txns = [_expense("1", 40, category="Fun")]
        edited, _ = self.tracker.edit(budget.id, {"category": "Fun", "limit": 50}, txns)
        assert edited.spent == Money.from_amount(40)
        assert self.tracker.status(edited) is BudgetStatus.WARNING

    def test_invalid_edit_keeps_budget(self):
        budget, _ = self.tracker.add({"category": "Food", "limit": 100}, [])
        with pytest.raises(ValidationError):
            self.tracker.edit(budget.id, {"category": "Food", "limit": 0}, [])
        assert self.tracker.get(budget.id) == budget

    def test_missing_ids(self):
        with pytest.raises(NotFoundError):
            self.tracker.edit("nope", {"category": "Food", "limit": 1}, [])
        with pytest.raises(NotFoundError):
            self.tracker.delete("nope")

    def test_summary(self):
        self.tracker.add({"category": "Food", "limit": 100}, [_expense("1", 50)])
        self.tracker.add({"category": "Fun", "limit": 100}, [])
        summary = self.tracker.summary()
        assert summary.count == 2
        assert summary.total_limit == Money.from_amount(200)
        assert summary.percentage == 25.0
        assert summary.remaining == Money.from_amount(150)
