#!/usr/bin/env python3
"""
Bulk Export and Import

A backup document aggregates every collection plus the profile under the same
logical keys the persistence store uses. Imports are all-or-nothing: the
document must contain all four collection keys and every record must parse
before anything is accepted.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from finance_tracker.core.datastore import (
    ACCOUNTS_KEY,
    BUDGETS_KEY,
    COLLECTION_KEYS,
    GOALS_KEY,
    PROFILE_KEY,
    TRANSACTIONS_KEY,
)
from finance_tracker.core.errors import PersistenceError, ValidationError
from finance_tracker.core.json_utils import read_document, write_document
from finance_tracker.core.models import Account, Budget, Goal, Profile, Transaction

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = 1


@dataclass(frozen=True)
class BackupSnapshot:
    """Parsed contents of a backup document."""

    transactions: list[Transaction]
    budgets: list[Budget]
    goals: list[Goal]
    accounts: list[Account]
    profile: Profile | None = None
    exported_at: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


def build_document(
    transactions: list[Transaction],
    budgets: list[Budget],
    goals: list[Goal],
    accounts: list[Account],
    profile: Profile,
) -> dict[str, Any]:
    """Build a backup document from engine collections."""
    return {
        "version": DOCUMENT_VERSION,
        "exported_at": datetime.now().isoformat(timespec="seconds"),
        TRANSACTIONS_KEY: [t.to_dict() for t in transactions],
        BUDGETS_KEY: [b.to_dict() for b in budgets],
        GOALS_KEY: [g.to_dict() for g in goals],
        ACCOUNTS_KEY: [a.to_dict() for a in accounts],
        PROFILE_KEY: profile.to_dict(),
    }


def _parse_records(document: Mapping[str, Any], key: str, parser) -> list:
    records = document[key]
    if not isinstance(records, list):
        raise ValidationError(f"'{key}' must be a list, got {type(records).__name__}", field=key)

    parsed = []
    seen_ids: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ValidationError(f"{key}[{index}] must be a mapping", field=key)
        try:
            item = parser(record)
        except ValidationError as e:
            raise ValidationError(f"{key}[{index}]: {e}", field=key) from e
        if item.id in seen_ids:
            raise ValidationError(f"{key}[{index}]: duplicate id {item.id}", field=key)
        seen_ids.add(item.id)
        parsed.append(item)
    return parsed


def parse_document(document: Any) -> BackupSnapshot:
    """
    Validate and parse a backup document.

    Raises:
        ValidationError: If any collection key is missing, or any record is
            malformed. Nothing is partially accepted.
    """
    if not isinstance(document, Mapping):
        raise ValidationError("Backup document must be a mapping")

    missing = [key for key in COLLECTION_KEYS if key not in document]
    if missing:
        raise ValidationError(f"Backup document is missing required collections: {', '.join(missing)}")

    profile = None
    if document.get(PROFILE_KEY) is not None:
        raw_profile = document[PROFILE_KEY]
        if not isinstance(raw_profile, Mapping):
            raise ValidationError("'profile' must be a mapping", field=PROFILE_KEY)
        profile = Profile.from_dict(raw_profile)

    metadata = {k: v for k, v in document.items() if k not in (*COLLECTION_KEYS, PROFILE_KEY, "exported_at")}
    return BackupSnapshot(
        transactions=_parse_records(document, TRANSACTIONS_KEY, Transaction.from_dict),
        budgets=_parse_records(document, BUDGETS_KEY, Budget.from_dict),
        goals=_parse_records(document, GOALS_KEY, Goal.from_dict),
        accounts=_parse_records(document, ACCOUNTS_KEY, Account.from_dict),
        profile=profile,
        exported_at=document.get("exported_at"),
        metadata=metadata,
    )


def write_backup(filepath: str | Path, document: Mapping[str, Any]) -> Path:
    """
    Write a backup document (YAML for .yaml/.yml paths, JSON otherwise).

    Raises:
        PersistenceError: If the file cannot be written
    """
    filepath = Path(filepath)
    try:
        write_document(filepath, dict(document))
    except OSError as e:
        logger.error(f"Failed to write backup {filepath}: {e}")
        raise PersistenceError(f"Could not write backup to {filepath}: {e}") from e
    logger.info(f"Wrote backup to {filepath}")
    return filepath


def read_backup(filepath: str | Path) -> Any:
    """
    Read a backup document without validating it.

    Raises:
        PersistenceError: If the file cannot be read or parsed
    """
    filepath = Path(filepath)
    try:
        return read_document(filepath)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to read backup {filepath}: {e}")
        raise PersistenceError(f"Could not read backup from {filepath}: {e}") from e
