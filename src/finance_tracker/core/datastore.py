#!/usr/bin/env python3
"""
DataStore Protocol - Standard interface for the persistence collaborator.

The engine treats storage as an opaque key-value store keyed by logical
collection name. It calls ``load`` once per key at start-up and ``save``
after every successful mutation (write-through).
"""

from typing import Any, Protocol

# Logical collection names
TRANSACTIONS_KEY = "transactions"
BUDGETS_KEY = "budgets"
GOALS_KEY = "goals"
ACCOUNTS_KEY = "accounts"
PROFILE_KEY = "profile"

COLLECTION_KEYS = (TRANSACTIONS_KEY, BUDGETS_KEY, GOALS_KEY, ACCOUNTS_KEY)
ALL_KEYS = (*COLLECTION_KEYS, PROFILE_KEY)


class DataStore(Protocol):
    """
    Protocol for the key-value persistence collaborator.

    Implementations store plain JSON-compatible values (lists of dicts for
    collections, a dict for the profile). Loads and saves are synchronous and
    all-or-nothing per key.
    """

    def load(self, key: str, default: Any = None) -> Any:
        """
        Load the value stored under ``key``.

        Args:
            key: Logical collection name
            default: Value returned when nothing is stored under the key

        Returns:
            Stored value, or ``default``

        Raises:
            OSError: If storage cannot be read
            ValueError: If stored data is corrupted
        """
        ...

    def save(self, key: str, value: Any) -> None:
        """
        Replace the value stored under ``key``.

        Raises:
            OSError: If storage cannot be written
        """
        ...

    def exists(self, key: str) -> bool:
        """Check whether anything is stored under ``key``."""
        ...
