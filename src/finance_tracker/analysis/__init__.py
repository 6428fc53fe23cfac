"""
Financial Analysis Package

Pure aggregation over ledger snapshots plus the read-only analytics view.

Key Components:
- aggregator: totals by type, category and month, percentages, filters
- analytics: reports, dashboard figures, DataFrame export and charts

The analytics module pulls in pandas and matplotlib, so it is imported
explicitly (``from finance_tracker.analysis.analytics import AnalyticsView``)
rather than re-exported here.
"""

from .aggregator import (
    MonthlyTotals,
    available_months,
    category_totals,
    filter_transactions,
    group_by_month,
    net_income,
    percentage_of,
    recent_transactions,
    savings_rate,
    sum_by_category,
    sum_by_type,
    top_categories,
)

__all__ = [
    "MonthlyTotals",
    "available_months",
    "category_totals",
    "filter_transactions",
    "group_by_month",
    "net_income",
    "percentage_of",
    "recent_transactions",
    "savings_rate",
    "sum_by_category",
    "sum_by_type",
    "top_categories",
]
