#!/usr/bin/env python3
"""
Savings Goal Tracker

Manages savings goals and their progress. Progress moves only through explicit
contributions, which are independent of the ledger: contributions are not
transactions and never appear in analytics.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from finance_tracker.analysis.aggregator import percentage_of
from finance_tracker.core.currency import AmountInput
from finance_tracker.core.dates import FinancialDate
from finance_tracker.core.errors import NotFoundError, ValidationError
from finance_tracker.core.models import Goal, generate_id
from finance_tracker.core.money import Money

logger = logging.getLogger(__name__)


def contribute(goal: Goal, amount: AmountInput) -> Goal:
    """
    Return the goal with ``amount`` added to its current amount.

    There is no upper bound: contributing past the target simply yields more
    than 100% progress.

    Raises:
        ValidationError: If amount is not a positive finite number
    """
    contribution = Money.from_amount(amount, "contribution")
    if contribution.cents <= 0:
        raise ValidationError(f"Contribution must be greater than zero, got {amount!r}", field="contribution")
    return replace(goal, current_amount=goal.current_amount + contribution)


def progress(goal: Goal) -> float:
    """Progress as a percentage of the target. Not clamped; a zero target gives 0.0."""
    return percentage_of(goal.current_amount, goal.target_amount)


def remaining(goal: Goal) -> Money:
    """Amount still needed. Negative once the target has been passed."""
    return goal.target_amount - goal.current_amount


def days_remaining(goal: Goal, today: FinancialDate | None = None) -> int:
    """Calendar days until the deadline. Negative values mean the goal is overdue."""
    return goal.deadline.days_until(today)


@dataclass(frozen=True)
class GoalProgress:
    """Point-in-time view of a goal for display."""

    goal: Goal
    percentage: float
    remaining: Money
    days_remaining: int

    @property
    def is_completed(self) -> bool:
        return self.percentage >= 100.0

    @property
    def is_overdue(self) -> bool:
        return self.days_remaining < 0 and not self.is_completed


def goal_progress(goal: Goal, today: FinancialDate | None = None) -> GoalProgress:
    """Build a GoalProgress snapshot."""
    return GoalProgress(
        goal=goal,
        percentage=progress(goal),
        remaining=remaining(goal),
        days_remaining=days_remaining(goal, today),
    )


class GoalTracker:
    """Holds savings goals and applies contributions to them."""

    def __init__(self, goals: Iterable[Goal] = (), id_factory: Callable[[], str] = generate_id):
        self._goals: dict[str, Goal] = {}
        self._id_factory = id_factory

        for goal in goals:
            if goal.id in self._goals:
                raise ValidationError(f"Duplicate goal id: {goal.id}", field="id")
            self._goals[goal.id] = goal

    def get(self, goal_id: str) -> Goal:
        """Get a goal by id, raising NotFoundError if absent."""
        try:
            return self._goals[goal_id]
        except KeyError:
            raise NotFoundError("Goal", goal_id) from None

    def all(self) -> list[Goal]:
        """Snapshot of every goal."""
        return list(self._goals.values())

    def progress_report(self, today: FinancialDate | None = None) -> list[GoalProgress]:
        """Progress for every goal, in goal order."""
        return [goal_progress(goal, today) for goal in self._goals.values()]

    def __len__(self) -> int:
        return len(self._goals)

    def __contains__(self, goal_id: object) -> bool:
        return goal_id in self._goals

    def add(self, fields: Mapping[str, Any]) -> Goal:
        """
        Create a goal.

        Raises:
            ValidationError: If title, amounts or deadline are malformed
        """
        goal = Goal.from_input(self._id_factory(), fields)
        self._goals[goal.id] = goal
        logger.info(f"Added goal {goal.id} '{goal.title}': target {goal.target_amount} by {goal.deadline}")
        return goal

    def edit(self, goal_id: str, fields: Mapping[str, Any]) -> Goal:
        """
        Replace a goal's fields.

        Raises:
            NotFoundError: If no goal has this id
            ValidationError: If any field is malformed (the old goal is kept)
        """
        self.get(goal_id)
        goal = Goal.from_input(goal_id, fields)
        self._goals[goal_id] = goal
        logger.info(f"Edited goal {goal_id}")
        return goal

    def delete(self, goal_id: str) -> Goal:
        """
        Remove a goal.

        Raises:
            NotFoundError: If no goal has this id
        """
        try:
            goal = self._goals.pop(goal_id)
        except KeyError:
            raise NotFoundError("Goal", goal_id) from None
        logger.info(f"Deleted goal {goal_id} ('{goal.title}')")
        return goal

    def contribute(self, goal_id: str, amount: AmountInput) -> Goal:
        """
        Add a contribution to a goal.

        Raises:
            NotFoundError: If no goal has this id
            ValidationError: If amount is not a positive finite number (state unchanged)
        """
        goal = contribute(self.get(goal_id), amount)
        self._goals[goal_id] = goal
        logger.info(f"Contributed to goal '{goal.title}': now {goal.current_amount} of {goal.target_amount}")
        return goal
