#!/usr/bin/env python3
"""
JSON File DataStore

Stores each logical collection as its own pretty-printed JSON file inside a
store directory (``<data_dir>/store/transactions.json`` and so on).
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from finance_tracker.core.datastore import ALL_KEYS
from finance_tracker.core.json_utils import read_json, write_json

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    DataStore backed by one JSON file per key.

    Saves are atomic per key (temporary file plus rename).
    """

    def __init__(self, store_dir: Path):
        """
        Initialize JSON file store.

        Args:
            store_dir: Directory holding the collection files
        """
        self.store_dir = Path(store_dir)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.store_dir / f"{key}.json"

    def exists(self, key: str) -> bool:
        """Check if a file exists for the key."""
        return self._path(key).exists()

    def load(self, key: str, default: Any = None) -> Any:
        """
        Load the value stored under a key.

        Returns:
            Parsed JSON value, or ``default`` when no file exists

        Raises:
            ValueError: If the file contains invalid JSON
        """
        path = self._path(key)
        if not path.exists():
            logger.debug(f"No stored data for '{key}', using default")
            return default
        return read_json(path)

    def save(self, key: str, value: Any) -> None:
        """Write the value for a key."""
        write_json(self._path(key), value)
        logger.debug(f"Saved '{key}' to {self._path(key)}")

    def last_modified(self) -> datetime | None:
        """Get timestamp of the most recently written collection file."""
        files = self._existing_files()
        if not files:
            return None
        latest = max(files, key=lambda p: p.stat().st_mtime)
        return datetime.fromtimestamp(latest.stat().st_mtime)

    def age_days(self) -> int | None:
        """Get age in days of the most recent save."""
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days

    def item_count(self) -> int | None:
        """Get count of stored transactions."""
        if not self.exists("transactions"):
            return None

        try:
            data = self.load("transactions", [])
            return len(data) if isinstance(data, list) else 0
        except ValueError:
            return 0

    def size_bytes(self) -> int | None:
        """Get total size of all collection files."""
        files = self._existing_files()
        if not files:
            return None
        return sum(f.stat().st_size for f in files)

    def summary_text(self) -> str:
        """Get human-readable summary."""
        count = self.item_count()
        if count is None:
            return f"No stored data in {self.store_dir}"
        return f"Store: {count} transactions in {self.store_dir}"

    def _existing_files(self) -> list[Path]:
        return [self._path(key) for key in ALL_KEYS if self._path(key).exists()]
