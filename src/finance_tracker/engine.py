#!/usr/bin/env python3
"""
Finance Engine

The explicit context object that owns the ledger, budgets, goals, accounts and
profile. It is constructed once from a persistence collaborator and is the only
mutation entry point for callers.

Consistency rules:
- Every ledger mutation is followed synchronously by recomputation of every
  budget's ``spent`` before the call returns.
- State is saved write-through after each successful mutation. If the save
  fails, memory is not rolled back: PersistenceError is raised (carrying the
  mutation's result) and the unsaved keys are retried on the next save.
- Validation and not-found errors are raised before any state changes.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from finance_tracker.accounts.book import AccountBook, AccountGroup
from finance_tracker.analysis.analytics import AnalyticsView, DashboardSummary, build_dashboard
from finance_tracker.budgets.tracker import BudgetStatus, BudgetSubscriber, BudgetTracker, StatusChange
from finance_tracker.core.config import Config, get_config
from finance_tracker.core.currency import AmountInput
from finance_tracker.core.datastore import (
    ACCOUNTS_KEY,
    ALL_KEYS,
    BUDGETS_KEY,
    GOALS_KEY,
    PROFILE_KEY,
    TRANSACTIONS_KEY,
    DataStore,
)
from finance_tracker.core.dates import FinancialDate
from finance_tracker.core.errors import PersistenceError, ValidationError
from finance_tracker.core.models import Account, Budget, Goal, Profile, Transaction, generate_id
from finance_tracker.core.money import Money
from finance_tracker.goals.tracker import GoalTracker
from finance_tracker.ledger.ledger import Ledger
from finance_tracker.storage.backup import build_document, parse_document, read_backup, write_backup
from finance_tracker.storage.json_store import JsonFileStore

logger = logging.getLogger(__name__)


class FinanceEngine:
    """
    Owns every collection and keeps derived figures consistent across mutations.

    Example:
        >>> engine = FinanceEngine(InMemoryStore())
        >>> engine.add_budget({"category": "Food", "limit": 120})
        >>> engine.add_transaction(
        ...     {"type": "expense", "amount": 150, "category": "Food", "date": "2024-01-05"}
        ... )
        >>> engine.budget_status(engine.budgets()[0].id)
        <BudgetStatus.OVER: 'over'>
    """

    def __init__(
        self,
        store: DataStore,
        config: Config | None = None,
        budget_subscribers: Iterable[BudgetSubscriber] = (),
        id_factory: Callable[[], str] = generate_id,
    ):
        """
        Load every collection from the store.

        Args:
            store: Persistence collaborator
            config: Application configuration (default: global config)
            budget_subscribers: Callables notified of budget status changes
            id_factory: Generator for new record ids

        Raises:
            PersistenceError: If stored data cannot be read or is malformed
        """
        self.store = store
        self.config = config or get_config()
        self._id_factory = id_factory
        self._budget_subscribers: list[BudgetSubscriber] = list(budget_subscribers)
        self._dirty: set[str] = set()

        transactions = self._load_records(TRANSACTIONS_KEY, Transaction.from_dict)
        budgets = self._load_records(BUDGETS_KEY, Budget.from_dict)
        goals = self._load_records(GOALS_KEY, Goal.from_dict)
        accounts = self._load_records(ACCOUNTS_KEY, Account.from_dict)
        profile = self._load_profile()

        try:
            self._ledger = Ledger(transactions, id_factory=id_factory)
            self.budget_tracker = self._make_budget_tracker(budgets)
            self.goal_tracker = GoalTracker(goals, id_factory=id_factory)
            self.account_book = AccountBook(
                accounts, default_currency=profile.currency, id_factory=id_factory
            )
        except ValidationError as e:
            raise PersistenceError(f"Stored data is inconsistent: {e}") from e
        self._profile = profile

        # Stored spent values are a cache; make them match the loaded ledger.
        self.budget_tracker.recompute_all(self._ledger.all())
        logger.info(
            f"Loaded {len(self._ledger)} transactions, {len(self.budget_tracker)} budgets, "
            f"{len(self.goal_tracker)} goals, {len(self.account_book)} accounts"
        )

    @classmethod
    def from_config(cls, config: Config | None = None, **kwargs: Any) -> "FinanceEngine":
        """Create an engine backed by the JSON file store in the configured data directory."""
        config = config or get_config()
        config.ensure_directories()
        return cls(JsonFileStore(config.storage.store_dir), config=config, **kwargs)

    # Loading and saving

    def _load_records(self, key: str, parser: Callable[[Mapping[str, Any]], Any]) -> list:
        try:
            raw = self.store.load(key, [])
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load '{key}': {e}")
            raise PersistenceError(f"Could not load '{key}': {e}", key=key) from e

        if not isinstance(raw, list):
            raise PersistenceError(f"Stored '{key}' must be a list, got {type(raw).__name__}", key=key)
        if not all(isinstance(record, Mapping) for record in raw):
            raise PersistenceError(f"Stored '{key}' contains a record that is not a mapping", key=key)
        try:
            return [parser(record) for record in raw]
        except ValidationError as e:
            raise PersistenceError(f"Stored '{key}' contains an invalid record: {e}", key=key) from e

    def _load_profile(self) -> Profile:
        try:
            raw = self.store.load(PROFILE_KEY, None)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load '{PROFILE_KEY}': {e}")
            raise PersistenceError(f"Could not load '{PROFILE_KEY}': {e}", key=PROFILE_KEY) from e

        if raw is None:
            return Profile(currency=self.config.default_currency)
        if not isinstance(raw, Mapping):
            raise PersistenceError("Stored profile must be a mapping", key=PROFILE_KEY)
        try:
            return Profile.from_dict(raw)
        except ValidationError as e:
            raise PersistenceError(f"Stored profile is invalid: {e}", key=PROFILE_KEY) from e

    def _serialize(self, key: str) -> Any:
        if key == TRANSACTIONS_KEY:
            return [t.to_dict() for t in self._ledger.all()]
        if key == BUDGETS_KEY:
            return [b.to_dict() for b in self.budget_tracker.all()]
        if key == GOALS_KEY:
            return [g.to_dict() for g in self.goal_tracker.all()]
        if key == ACCOUNTS_KEY:
            return [a.to_dict() for a in self.account_book.all()]
        if key == PROFILE_KEY:
            return self._profile.to_dict()
        raise ValueError(f"Unknown collection key: {key}")

    def _persist(self, *keys: str, result: Any = None) -> None:
        """Write-through save of the given keys plus any still unsaved from earlier failures."""
        self._dirty.update(keys)
        for key in [k for k in ALL_KEYS if k in self._dirty]:
            try:
                self.store.save(key, self._serialize(key))
            except (OSError, ValueError, TypeError) as e:
                logger.error(f"Failed to save '{key}': {e}")
                raise PersistenceError(
                    f"Change applied in memory but not saved ('{key}'): {e}", key=key, result=result
                ) from e
            self._dirty.discard(key)

    def flush(self) -> None:
        """Retry saving any keys left unsaved by an earlier PersistenceError."""
        self._persist()

    @property
    def unsaved_keys(self) -> set[str]:
        """Keys whose in-memory state is not yet durable."""
        return set(self._dirty)

    # Budget subscriptions

    def _make_budget_tracker(self, budgets: Iterable[Budget]) -> BudgetTracker:
        tracker = BudgetTracker(budgets, thresholds=self.config.budget, id_factory=self._id_factory)
        for callback in self._budget_subscribers:
            tracker.subscribe(callback)
        return tracker

    def subscribe_budget_changes(self, callback: BudgetSubscriber) -> None:
        """Register a callable to receive budget StatusChange notifications."""
        self._budget_subscribers.append(callback)
        self.budget_tracker.subscribe(callback)

    def _finish(self, keys: tuple[str, ...], result: Any, changes: Iterable[StatusChange] = ()) -> Any:
        try:
            self._persist(*keys, result=result)
        except PersistenceError:
            # The change is live in memory, so subscribers still hear about it,
            # but the save failure is what the caller sees.
            try:
                self.budget_tracker.notify(changes)
            except Exception as e:
                logger.error(f"Budget subscriber failed after an unsaved change: {e}")
            raise
        self.budget_tracker.notify(changes)
        return result

    # Reads

    def transactions(self) -> list[Transaction]:
        return self._ledger.all()

    def get_transaction(self, txn_id: str) -> Transaction:
        """Get a transaction by id, raising NotFoundError if absent."""
        return self._ledger.get(txn_id)

    def budgets(self) -> list[Budget]:
        return self.budget_tracker.all()

    def goals(self) -> list[Goal]:
        return self.goal_tracker.all()

    def accounts(self) -> list[Account]:
        return self.account_book.all()

    @property
    def profile(self) -> Profile:
        return self._profile

    def budget_status(self, budget_id: str) -> BudgetStatus:
        return self.budget_tracker.status(self.budget_tracker.get(budget_id))

    def net_worth(self) -> Money:
        return self.account_book.net_worth()

    def account_breakdown(self) -> list[AccountGroup]:
        return self.account_book.breakdown()

    def analytics(self) -> AnalyticsView:
        """Analytics over a snapshot of the current ledger."""
        return AnalyticsView(self._ledger.all(), self.config.analytics)

    def dashboard(self, today: FinancialDate | None = None) -> DashboardSummary:
        return build_dashboard(
            self._ledger.all(),
            self.account_book.all(),
            self.goal_tracker.all(),
            budgets=self.budget_tracker.all(),
            today=today,
            thresholds=self.config.budget,
        )

    # Transactions

    def add_transaction(self, fields: Mapping[str, Any]) -> Transaction:
        """Record a new transaction and bring every budget up to date."""
        txn = self._ledger.insert(fields)
        changes = self.budget_tracker.recompute_all(self._ledger.all())
        return self._finish((TRANSACTIONS_KEY, BUDGETS_KEY), txn, changes)

    def edit_transaction(self, txn_id: str, fields: Mapping[str, Any]) -> Transaction:
        """Replace a transaction by id and bring every budget up to date."""
        txn = self._ledger.update(txn_id, fields)
        changes = self.budget_tracker.recompute_all(self._ledger.all())
        return self._finish((TRANSACTIONS_KEY, BUDGETS_KEY), txn, changes)

    def delete_transaction(self, txn_id: str) -> Transaction:
        """Remove a transaction and bring every budget up to date."""
        txn = self._ledger.delete(txn_id)
        changes = self.budget_tracker.recompute_all(self._ledger.all())
        return self._finish((TRANSACTIONS_KEY, BUDGETS_KEY), txn, changes)

    # Budgets

    def add_budget(self, fields: Mapping[str, Any]) -> Budget:
        budget, changes = self.budget_tracker.add(fields, self._ledger.all())
        return self._finish((BUDGETS_KEY,), budget, changes)

    def edit_budget(self, budget_id: str, fields: Mapping[str, Any]) -> Budget:
        budget, changes = self.budget_tracker.edit(budget_id, fields, self._ledger.all())
        return self._finish((BUDGETS_KEY,), budget, changes)

    def delete_budget(self, budget_id: str) -> Budget:
        budget = self.budget_tracker.delete(budget_id)
        return self._finish((BUDGETS_KEY,), budget)

    # Goals

    def add_goal(self, fields: Mapping[str, Any]) -> Goal:
        return self._finish((GOALS_KEY,), self.goal_tracker.add(fields))

    def edit_goal(self, goal_id: str, fields: Mapping[str, Any]) -> Goal:
        return self._finish((GOALS_KEY,), self.goal_tracker.edit(goal_id, fields))

    def delete_goal(self, goal_id: str) -> Goal:
        return self._finish((GOALS_KEY,), self.goal_tracker.delete(goal_id))

    def contribute_to_goal(self, goal_id: str, amount: AmountInput) -> Goal:
        """Add a contribution to a goal. Contributions are not ledger transactions."""
        return self._finish((GOALS_KEY,), self.goal_tracker.contribute(goal_id, amount))

    # Accounts

    def add_account(self, fields: Mapping[str, Any]) -> Account:
        return self._finish((ACCOUNTS_KEY,), self.account_book.add(fields))

    def edit_account(self, account_id: str, fields: Mapping[str, Any]) -> Account:
        return self._finish((ACCOUNTS_KEY,), self.account_book.edit(account_id, fields))

    def delete_account(self, account_id: str) -> Account:
        return self._finish((ACCOUNTS_KEY,), self.account_book.delete(account_id))

    # Profile

    def update_profile(self, fields: Mapping[str, Any]) -> Profile:
        """
        Update profile fields. Omitted fields keep their current values.

        Returns the new profile; there is no broadcast to other components.
        """
        merged = self._profile.to_dict()
        for name, value in fields.items():
            if name == "notifications" and isinstance(value, Mapping):
                merged["notifications"] = {**merged["notifications"], **value}
            else:
                merged[name] = value
        profile = Profile.from_dict(merged)
        self._profile = profile
        self.account_book.default_currency = profile.currency
        logger.info("Updated profile")
        return self._finish((PROFILE_KEY,), profile)

    # Bulk export / import

    def export_document(self) -> dict[str, Any]:
        """Build a backup document holding every collection and the profile."""
        return build_document(
            self._ledger.all(),
            self.budget_tracker.all(),
            self.goal_tracker.all(),
            self.account_book.all(),
            self._profile,
        )

    def import_document(self, document: Any) -> None:
        """
        Replace every collection with the contents of a backup document.

        The whole document is validated first; a document missing any of the
        four collection keys, or holding any malformed record, is rejected and
        nothing changes. Budget ``spent`` values are recomputed from the
        imported transactions. The profile is replaced only when present.

        Raises:
            ValidationError: If the document is rejected
            PersistenceError: If the imported state could not be saved
        """
        snapshot = parse_document(document)
        profile = snapshot.profile or self._profile

        ledger = Ledger(snapshot.transactions, id_factory=self._id_factory)
        budget_tracker = self._make_budget_tracker(snapshot.budgets)
        budget_tracker.recompute_all(ledger.all())
        goal_tracker = GoalTracker(snapshot.goals, id_factory=self._id_factory)
        account_book = AccountBook(snapshot.accounts, default_currency=profile.currency, id_factory=self._id_factory)

        self._ledger = ledger
        self.budget_tracker = budget_tracker
        self.goal_tracker = goal_tracker
        self.account_book = account_book
        self._profile = profile
        logger.info(
            f"Imported {len(ledger)} transactions, {len(budget_tracker)} budgets, "
            f"{len(goal_tracker)} goals, {len(account_book)} accounts"
        )
        self._persist(*ALL_KEYS)

    def export_to_file(self, filepath: str | Path) -> Path:
        """Write a backup document to a file (YAML for .yaml/.yml, JSON otherwise)."""
        return write_backup(filepath, self.export_document())

    def import_from_file(self, filepath: str | Path) -> None:
        """
        Import a backup document from a file.

        Raises:
            PersistenceError: If the file cannot be read, or the result cannot be saved
            ValidationError: If the document is rejected
        """
        self.import_document(read_backup(filepath))
