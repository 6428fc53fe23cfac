#!/usr/bin/env python3
"""
In-Memory DataStore

Keeps values in a dictionary. Useful for tests and for running the engine
without touching disk.
"""

import copy
from typing import Any


class InMemoryStore:
    """DataStore holding deep copies of saved values in memory."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.save_count = 0

    def exists(self, key: str) -> bool:
        return key in self._data

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)
        self.save_count += 1
