#!/usr/bin/env python3
"""
Analytics View

Read-only composition layer over the aggregation functions for time-series and
category-breakdown reporting. Nothing is cached: every report is recomputed
from the transaction snapshot the view was built with.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import matplotlib
import pandas as pd

matplotlib.use("Agg")  # Use non-interactive backend
import matplotlib.pyplot as plt

from finance_tracker.accounts.book import net_worth
from finance_tracker.budgets.tracker import BudgetStatus, budget_status
from finance_tracker.core.config import AnalyticsConfig, BudgetConfig, get_config
from finance_tracker.core.dates import FinancialDate
from finance_tracker.core.models import Account, Budget, Goal, Transaction, TransactionType
from finance_tracker.core.money import Money
from finance_tracker.goals.tracker import GoalProgress, goal_progress

from .aggregator import (
    MonthlyTotals,
    average_monthly,
    category_totals,
    count_by_type,
    count_recurring,
    group_by_month,
    percentage_of,
    recent_transactions,
    savings_rate,
    sum_by_type,
    transactions_in_month,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryShare:
    """One category's total and its share of the overall total."""

    category: str
    amount: Money
    percentage: float


@dataclass(frozen=True)
class AnalyticsReport:
    """Analytics for one year, focused on one month of that year."""

    year: int
    month: int
    monthly: list[MonthlyTotals]
    month_income: Money
    month_expense: Money
    category_breakdown: list[CategoryShare]
    top_categories: list[CategoryShare]
    average_income: Money
    average_expense: Money
    income_count: int
    expense_count: int
    recurring_count: int

    @property
    def month_net(self) -> Money:
        return self.month_income - self.month_expense

    @property
    def savings_rate(self) -> float:
        return savings_rate(self.month_income, self.month_expense)

    @property
    def largest_monthly_amount(self) -> Money:
        """Largest income or expense figure in the series, for scaling bars."""
        return max((max(m.income, m.expense) for m in self.monthly), default=Money.zero())


@dataclass(frozen=True)
class BudgetProgress:
    """A budget with its spent share of the limit."""

    budget: Budget
    percentage: float
    status: BudgetStatus

    @property
    def over_limit(self) -> bool:
        return self.budget.spent > self.budget.limit


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for the dashboard."""

    total_balance: Money
    month_income: Money
    month_expense: Money
    recent_transactions: list[Transaction]
    goals: list[GoalProgress]
    budgets: list[BudgetProgress]

    @property
    def month_net(self) -> Money:
        return self.month_income - self.month_expense


def build_dashboard(
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
    goals: Sequence[Goal],
    budgets: Sequence[Budget] = (),
    today: FinancialDate | None = None,
    recent_limit: int = 5,
    goal_limit: int = 3,
    budget_limit: int = 6,
    thresholds: BudgetConfig | None = None,
) -> DashboardSummary:
    """Assemble dashboard figures: net worth, this month's totals, recent activity, first goals and budgets."""
    today = today or FinancialDate.today()
    snapshot = list(transactions)
    this_month = transactions_in_month(snapshot, today.year, today.month)
    return DashboardSummary(
        total_balance=net_worth(accounts),
        month_income=sum_by_type(this_month, TransactionType.INCOME),
        month_expense=sum_by_type(this_month, TransactionType.EXPENSE),
        recent_transactions=recent_transactions(snapshot, recent_limit),
        goals=[goal_progress(goal, today) for goal in goals[:goal_limit]],
        budgets=[
            BudgetProgress(
                budget=budget,
                percentage=percentage_of(budget.spent, budget.limit),
                status=budget_status(budget, thresholds),
            )
            for budget in budgets[:budget_limit]
        ],
    )


class AnalyticsView:
    """
    Reporting over a transaction snapshot.

    Features:
    - Twelve-month income/expense series, zero-filled
    - Expense category breakdown with percentages for a focus month
    - Trailing monthly averages and savings rate
    - pandas DataFrame export and a matplotlib bar chart
    """

    def __init__(self, transactions: Iterable[Transaction], config: Optional[AnalyticsConfig] = None):
        """Initialize the view with a snapshot of the ledger."""
        self.transactions = list(transactions)
        self.config = config

    def _analytics_config(self) -> AnalyticsConfig:
        if self.config is None:
            self.config = get_config().analytics
        return self.config

    def report(self, year: int, month: int, top_limit: int = 5, average_window: int = 6) -> AnalyticsReport:
        """
        Build the analytics report for a year, focused on one month.

        Args:
            year: Calendar year for the monthly series
            month: Focus month (1-12) for the category breakdown and averages
            top_limit: Number of top expense categories
            average_window: Trailing months averaged (clipped at January)
        """
        monthly = group_by_month(self.transactions, year)
        average_income, average_expense = average_monthly(monthly, month, average_window)

        focus = transactions_in_month(self.transactions, year, month)
        expense_totals = category_totals(focus, TransactionType.EXPENSE)
        total_expense = Money.sum(expense_totals.values())
        breakdown = sorted(
            (
                CategoryShare(category=category, amount=amount, percentage=percentage_of(amount, total_expense))
                for category, amount in expense_totals.items()
            ),
            key=lambda share: share.amount.cents,
            reverse=True,
        )

        counts = count_by_type(self.transactions)
        return AnalyticsReport(
            year=year,
            month=month,
            monthly=monthly,
            month_income=sum_by_type(focus, TransactionType.INCOME),
            month_expense=total_expense,
            category_breakdown=breakdown,
            top_categories=breakdown[:top_limit],
            average_income=average_income,
            average_expense=average_expense,
            income_count=counts[TransactionType.INCOME],
            expense_count=counts[TransactionType.EXPENSE],
            recurring_count=count_recurring(self.transactions),
        )

    def monthly_frame(self, year: int) -> pd.DataFrame:
        """
        Monthly series as a DataFrame indexed by month abbreviation.

        Columns: Income, Expense, Net (in currency units, not minor units).
        """
        monthly = group_by_month(self.transactions, year)
        df = pd.DataFrame(
            {
                "Month": [m.label for m in monthly],
                "Income": [float(m.income.to_decimal()) for m in monthly],
                "Expense": [float(m.expense.to_decimal()) for m in monthly],
                "Net": [float(m.net.to_decimal()) for m in monthly],
            }
        )
        df.set_index("Month", inplace=True)
        return df

    def generate_chart(self, year: int, output_dir: Optional[Path] = None) -> Path:
        """
        Render the monthly income/expense bar chart as a PNG.

        Returns:
            Path to the generated image
        """
        config = self._analytics_config()
        if output_dir is None:
            output_dir = config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        df = self.monthly_frame(year)
        fig, ax = plt.subplots(figsize=(config.chart_width, config.chart_height))
        try:
            df[["Income", "Expense"]].plot(kind="bar", ax=ax, color=["#16a34a", "#dc2626"], rot=0)
            ax.set_title(f"Monthly Income vs Expenses ({year})")
            ax.set_xlabel("")
            ax.set_ylabel("Amount")
            ax.grid(axis="y", alpha=0.3)

            output_path = output_dir / f"monthly_{year}.png"
            fig.tight_layout()
            fig.savefig(output_path, dpi=120)
        finally:
            plt.close(fig)

        logger.info(f"Wrote monthly chart for {year} to {output_path}")
        return output_path
