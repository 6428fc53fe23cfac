"""
Personal Finance Tracker

Track income and expenses, per-category budgets, savings goals and account
balances, with analytics over the transaction history.

Key Features:
- Ledger of income/expense transactions with validated, exact amounts
- Budgets whose spent totals always match the ledger
- Savings goals advanced by contributions
- Account balances, net worth and per-type breakdowns
- Monthly and category analytics with charts
- JSON file persistence and JSON/YAML backups

Domain Packages:
- core: Money, dates, data models, configuration, errors
- ledger: the transaction collection
- budgets: budget tracking and status notifications
- goals: savings goal tracking
- accounts: account balances and net worth
- analysis: aggregation functions and the analytics view
- storage: persistence stores and backup documents
- cli: command-line interface

Example Usage:
    from finance_tracker import FinanceEngine
    from finance_tracker.storage import InMemoryStore

    engine = FinanceEngine(InMemoryStore())
    engine.add_transaction({"type": "income", "amount": "2500", "category": "Salary", "date": "2024-01-31"})

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Karl Davis"

from .core.config import Environment, get_config
from .core.errors import FinanceTrackerError, NotFoundError, PersistenceError, ValidationError
from .core.models import Account, Budget, Goal, Profile, Transaction, TransactionType
from .core.money import Money
from .engine import FinanceEngine

__all__ = [
    "Account",
    "Budget",
    "Environment",
    "FinanceEngine",
    "FinanceTrackerError",
    "Goal",
    "Money",
    "NotFoundError",
    "PersistenceError",
    "Profile",
    "Transaction",
    "TransactionType",
    "ValidationError",
    "get_config",
]
