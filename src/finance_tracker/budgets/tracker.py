#!/usr/bin/env python3
"""
Budget Tracker

Maintains each budget's derived ``spent`` total and its status. ``spent`` is a
materialized cache of the ledger: the sum of all expense transactions whose
category exactly equals the budget's category, over the entire history. The
budget period is a label and does not window the total.

Status transitions are reported by return value and delivered to explicitly
subscribed callables.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from finance_tracker.analysis.aggregator import percentage_of, sum_by_category
from finance_tracker.core.config import BudgetConfig
from finance_tracker.core.errors import NotFoundError, ValidationError
from finance_tracker.core.models import Budget, Transaction, TransactionType, generate_id
from finance_tracker.core.money import Money

logger = logging.getLogger(__name__)


class BudgetStatus(Enum):
    """Budget health derived from spent as a percentage of the limit."""

    GOOD = "good"  # < 80%
    WARNING = "warning"  # 80% - 100%
    OVER = "over"  # >= 100%


def budget_status(budget: Budget, thresholds: BudgetConfig | None = None) -> BudgetStatus:
    """
    Classify a budget.

    ``warning`` starts at the warning threshold (inclusive) and ``over`` at the
    over threshold (inclusive).
    """
    thresholds = thresholds or BudgetConfig()
    percentage = percentage_of(budget.spent, budget.limit)
    if percentage >= thresholds.over_percent:
        return BudgetStatus.OVER
    if percentage >= thresholds.warning_percent:
        return BudgetStatus.WARNING
    return BudgetStatus.GOOD


def recompute(budget: Budget, transactions: Iterable[Transaction]) -> Budget:
    """
    Return the budget with ``spent`` recomputed from the transactions.

    Pure, total and idempotent: the same inputs always give the same result.
    """
    spent = sum_by_category(transactions, budget.category, TransactionType.EXPENSE)
    if spent == budget.spent:
        return budget
    return replace(budget, spent=spent)


@dataclass(frozen=True)
class StatusChange:
    """A budget moved from one status to another."""

    budget_id: str
    category: str
    previous: BudgetStatus | None
    current: BudgetStatus
    spent: Money
    limit: Money

    @property
    def percentage(self) -> float:
        return percentage_of(self.spent, self.limit)


@dataclass(frozen=True)
class BudgetSummary:
    """Totals across all budgets."""

    total_limit: Money
    total_spent: Money
    count: int

    @property
    def percentage(self) -> float:
        return percentage_of(self.total_spent, self.total_limit)

    @property
    def remaining(self) -> Money:
        return self.total_limit - self.total_spent


BudgetSubscriber = Callable[[StatusChange], None]


class BudgetTracker:
    """
    Holds the budgets and keeps their ``spent`` fields consistent with the ledger.

    The tracker never reads the ledger on its own; callers pass the current
    transaction snapshot to every operation that can change ``spent``.
    """

    def __init__(
        self,
        budgets: Iterable[Budget] = (),
        thresholds: BudgetConfig | None = None,
        id_factory: Callable[[], str] = generate_id,
    ):
        self.thresholds = thresholds or BudgetConfig()
        self._budgets: dict[str, Budget] = {}
        self._id_factory = id_factory
        self._subscribers: list[BudgetSubscriber] = []

        for budget in budgets:
            if budget.id in self._budgets:
                raise ValidationError(f"Duplicate budget id: {budget.id}", field="id")
            self._budgets[budget.id] = budget

    # Subscriptions

    def subscribe(self, callback: BudgetSubscriber) -> None:
        """Register a callable to receive StatusChange notifications."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: BudgetSubscriber) -> None:
        """Remove a previously registered callable."""
        self._subscribers.remove(callback)

    def notify(self, changes: Iterable[StatusChange]) -> None:
        """Deliver status changes to every subscriber, in order."""
        for change in changes:
            logger.info(
                f"Budget '{change.category}' status: "
                f"{change.previous.value if change.previous else 'new'} -> {change.current.value} "
                f"({change.percentage:.1f}%)"
            )
            for callback in self._subscribers:
                callback(change)

    # Queries

    def get(self, budget_id: str) -> Budget:
        """Get a budget by id, raising NotFoundError if absent."""
        try:
            return self._budgets[budget_id]
        except KeyError:
            raise NotFoundError("Budget", budget_id) from None

    def all(self) -> list[Budget]:
        """Snapshot of every budget."""
        return list(self._budgets.values())

    def status(self, budget: Budget) -> BudgetStatus:
        return budget_status(budget, self.thresholds)

    def percentage(self, budget: Budget) -> float:
        return percentage_of(budget.spent, budget.limit)

    def summary(self) -> BudgetSummary:
        budgets = self._budgets.values()
        return BudgetSummary(
            total_limit=Money.sum(b.limit for b in budgets),
            total_spent=Money.sum(b.spent for b in budgets),
            count=len(self._budgets),
        )

    def __len__(self) -> int:
        return len(self._budgets)

    def __contains__(self, budget_id: object) -> bool:
        return budget_id in self._budgets

    # Mutations

    def _store(self, budget: Budget, previous: Budget | None) -> list[StatusChange]:
        self._budgets[budget.id] = budget
        old_status = self.status(previous) if previous is not None else None
        new_status = self.status(budget)
        if old_status is new_status:
            return []
        return [
            StatusChange(
                budget_id=budget.id,
                category=budget.category,
                previous=old_status,
                current=new_status,
                spent=budget.spent,
                limit=budget.limit,
            )
        ]

    def add(self, fields: Mapping[str, Any], transactions: Iterable[Transaction]) -> tuple[Budget, list[StatusChange]]:
        """
        Create a budget with ``spent`` computed from the transactions.

        Raises:
            ValidationError: If category, limit or period is malformed
        """
        budget = recompute(Budget.from_input(self._id_factory(), fields), transactions)
        changes = self._store(budget, None)
        logger.info(f"Added budget {budget.id} for '{budget.category}': {budget.spent} of {budget.limit}")
        return budget, changes

    def edit(
        self, budget_id: str, fields: Mapping[str, Any], transactions: Iterable[Transaction]
    ) -> tuple[Budget, list[StatusChange]]:
        """
        Replace a budget's category, limit and period, recomputing ``spent``.

        Raises:
            NotFoundError: If no budget has this id
            ValidationError: If any field is malformed (the old budget is kept)
        """
        previous = self.get(budget_id)
        budget = recompute(Budget.from_input(budget_id, fields), transactions)
        changes = self._store(budget, previous)
        logger.info(f"Edited budget {budget_id}")
        return budget, changes

    def delete(self, budget_id: str) -> Budget:
        """
        Stop tracking a budget. The ledger is unaffected.

        Raises:
            NotFoundError: If no budget has this id
        """
        try:
            budget = self._budgets.pop(budget_id)
        except KeyError:
            raise NotFoundError("Budget", budget_id) from None
        logger.info(f"Deleted budget {budget_id} ('{budget.category}')")
        return budget

    def recompute_all(self, transactions: Iterable[Transaction]) -> list[StatusChange]:
        """
        Recompute ``spent`` for every budget.

        Returns:
            Status changes caused by the recomputation, in budget order
        """
        snapshot = list(transactions)
        changes: list[StatusChange] = []
        for previous in list(self._budgets.values()):
            budget = recompute(previous, snapshot)
            if budget is not previous:
                logger.debug(f"Budget '{budget.category}' spent {previous.spent} -> {budget.spent}")
            changes.extend(self._store(budget, previous))
        return changes
