"""
Budget Tracking Package

Per-category spending caps whose spent totals are kept consistent with the ledger.
"""

from .tracker import BudgetStatus, BudgetSummary, BudgetTracker, StatusChange, budget_status, recompute

__all__ = [
    "BudgetStatus",
    "BudgetSummary",
    "BudgetTracker",
    "StatusChange",
    "budget_status",
    "recompute",
]
