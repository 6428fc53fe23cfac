"""
Core Utilities Package

Shared value types, data models, configuration and persistence contracts used
across every finance tracker component.

This package provides:
- Money and currency handling with integer minor units for precision
- Immutable records for transactions, budgets, goals, accounts and the profile
- Configuration management for environment-specific settings
- The DataStore persistence protocol and its logical keys
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import format_amount, minor_units_to_decimal, minor_units_to_str, to_decimal, to_minor_units
from .datastore import (
    ACCOUNTS_KEY,
    ALL_KEYS,
    BUDGETS_KEY,
    COLLECTION_KEYS,
    GOALS_KEY,
    PROFILE_KEY,
    TRANSACTIONS_KEY,
    DataStore,
)
from .dates import FinancialDate
from .errors import FinanceTrackerError, NotFoundError, PersistenceError, ValidationError
from .models import (
    Account,
    AccountType,
    Budget,
    BudgetPeriod,
    Goal,
    NotificationSettings,
    Profile,
    Transaction,
    TransactionType,
    generate_id,
)
from .money import Money

__all__ = [
    "ACCOUNTS_KEY",
    "ALL_KEYS",
    "BUDGETS_KEY",
    "COLLECTION_KEYS",
    "GOALS_KEY",
    "PROFILE_KEY",
    "TRANSACTIONS_KEY",
    # Data models
    "Account",
    "AccountType",
    "Budget",
    "BudgetPeriod",
    # Configuration
    "Config",
    "DataStore",
    "Environment",
    # Errors
    "FinanceTrackerError",
    "FinancialDate",
    "Goal",
    "Money",
    "NotFoundError",
    "NotificationSettings",
    "PersistenceError",
    "Profile",
    "Transaction",
    "TransactionType",
    "ValidationError",
    # Currency utilities
    "format_amount",
    "generate_id",
    "get_config",
    "get_data_dir",
    "is_development",
    "is_production",
    "is_test",
    "minor_units_to_decimal",
    "minor_units_to_str",
    "reload_config",
    "to_decimal",
    "to_minor_units",
]
