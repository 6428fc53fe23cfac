#!/usr/bin/env python3
"""Tests for savings goals and contributions."""

import pytest

from finance_tracker.core.dates import FinancialDate
from finance_tracker.core.errors import NotFoundError, ValidationError
from finance_tracker.core.models import Goal
from finance_tracker.core.money import Money
from finance_tracker.goals import GoalTracker, contribute, days_remaining, goal_progress, progress, remaining

TODAY = FinancialDate.from_string("2024-06-01")


def _goal(**overrides):
    fields = {"title": "Trip", "target_amount": "1000", "current_amount": "200", "deadline": "2024-12-31"}
    return Goal.from_input("g1", {**fields, **overrides})


@pytest.mark.goals
class TestContribute:
    """Test the contribute function."""

    def test_contribution_adds(self):
        assert contribute(_goal(), 50).current_amount == Money.from_amount(250)

    @pytest.mark.parametrize("amount", [0, -10, "abc", float("nan"), float("inf")])
    def test_rejects_non_positive_or_non_finite(self, amount):
        goal = _goal()
        with pytest.raises(ValidationError):
            contribute(goal, amount)
        assert goal.current_amount == Money.from_amount(200)

    def test_no_upper_bound(self):
        goal = contribute(_goal(), 5000)
        assert progress(goal) == 520.0
        assert remaining(goal) == Money.from_amount(-4200)


@pytest.mark.goals
class TestGoalProgress:
    """Test progress and deadline reporting."""

    def test_progress_and_days(self):
        p = goal_progress(_goal(), TODAY)
        assert p.percentage == 20.0
        assert p.remaining == Money.from_amount(800)
        assert p.days_remaining == 213
        assert not p.is_completed
        assert not p.is_overdue

    def test_overdue(self):
        p = goal_progress(_goal(deadline="2024-05-01"), TODAY)
        assert p.days_remaining == -31
        assert p.is_overdue

    def test_completed_goal_is_not_overdue(self):
        p = goal_progress(_goal(current_amount="1000", deadline="2024-05-01"), TODAY)
        assert p.is_completed
        assert not p.is_overdue

    def test_days_remaining_zero_on_deadline(self):
        assert days_remaining(_goal(deadline="2024-06-01"), TODAY) == 0


@pytest.mark.goals
class TestGoalTracker:
    """Test GoalTracker mutations."""

    def setup_method(self):
        self.tracker = GoalTracker()
        self.goal = self.tracker.add(
            {"title": "Trip", "target_amount": "1000", "current_amount": "200", "deadline": "2024-12-31"}
        )

    def test_contribute_then_reject(self):
        updated = self.tracker.contribute(self.goal.id, 50)
        assert updated.current_amount == Money.from_amount(250)
        with pytest.raises(ValidationError):
            self.tracker.contribute(self.goal.id, -10)
        assert self.tracker.get(self.goal.id).current_amount == Money.from_amount(250)

    def test_edit_and_delete(self):
        edited = self.tracker.edit(
            self.goal.id, {"title": "Big trip", "target_amount": "2000", "deadline": "2025-01-31"}
        )
        assert edited.title == "Big trip"
        assert self.tracker.delete(self.goal.id) == edited
        assert len(self.tracker) == 0

    def test_missing_ids(self):
        with pytest.raises(NotFoundError):
            self.tracker.contribute("nope", 10)
        with pytest.raises(NotFoundError):
            self.tracker.delete("nope")

    def test_progress_report(self):
        report = self.tracker.progress_report(TODAY)
        assert [p.goal.id for p in report] == [self.goal.id]
