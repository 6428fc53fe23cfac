"""
Accounts Package

Snapshot account balances, net worth and per-type breakdowns.
"""

from .book import OTHER_GROUP, AccountBook, AccountGroup, balance_breakdown, group_by_type, net_worth

__all__ = [
    "OTHER_GROUP",
    "AccountBook",
    "AccountGroup",
    "balance_breakdown",
    "group_by_type",
    "net_worth",
]
