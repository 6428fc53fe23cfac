#!/usr/bin/env python3
"""
Transaction Ledger

The authoritative collection of transaction records. Supports insert, update,
delete and snapshot reads. Budget recomputation after each mutation is the
responsibility of FinanceEngine, which is the only public mutation path.
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import replace
from typing import Any

from finance_tracker.core.errors import NotFoundError, ValidationError
from finance_tracker.core.models import Transaction, generate_id

logger = logging.getLogger(__name__)


class Ledger:
    """
    Ordered set of transactions keyed by id.

    Insertion order is preserved for reads but is not a contract; updates keep
    a record in its original position.
    """

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        id_factory: Callable[[], str] = generate_id,
    ):
        self._transactions: dict[str, Transaction] = {}
        self._id_factory = id_factory
        # Ids handed out or loaded during this ledger's lifetime. Never reissued.
        self._issued_ids: set[str] = set()

        for txn in transactions:
            if txn.id in self._transactions:
                raise ValidationError(f"Duplicate transaction id: {txn.id}", field="id")
            self._transactions[txn.id] = txn
            self._issued_ids.add(txn.id)

    def _new_id(self) -> str:
        while True:
            txn_id = self._id_factory()
            if txn_id not in self._issued_ids:
                self._issued_ids.add(txn_id)
                return txn_id

    def insert(self, fields: Mapping[str, Any]) -> Transaction:
        """
        Validate and append a new transaction.

        Args:
            fields: Transaction fields without an id

        Returns:
            The stored transaction, with its newly assigned id

        Raises:
            ValidationError: If any field is malformed (nothing is stored)
        """
        txn = replace(Transaction.from_input("pending", fields), id=self._new_id())
        self._transactions[txn.id] = txn
        logger.info(f"Inserted {txn.type.value} transaction {txn.id}: {txn.amount} in '{txn.category}'")
        return txn

    def update(self, txn_id: str, fields: Mapping[str, Any]) -> Transaction:
        """
        Replace the transaction with the given id.

        Raises:
            NotFoundError: If no transaction has this id
            ValidationError: If any field is malformed (the old record is kept)
        """
        if txn_id not in self._transactions:
            raise NotFoundError("Transaction", txn_id)
        txn = Transaction.from_input(txn_id, fields)
        self._transactions[txn_id] = txn
        logger.info(f"Updated transaction {txn_id}")
        return txn

    def delete(self, txn_id: str) -> Transaction:
        """
        Remove a transaction.

        Returns:
            The removed transaction

        Raises:
            NotFoundError: If no transaction has this id
        """
        try:
            txn = self._transactions.pop(txn_id)
        except KeyError:
            raise NotFoundError("Transaction", txn_id) from None
        logger.info(f"Deleted transaction {txn_id}")
        return txn

    def get(self, txn_id: str) -> Transaction:
        """Get a transaction by id, raising NotFoundError if absent."""
        try:
            return self._transactions[txn_id]
        except KeyError:
            raise NotFoundError("Transaction", txn_id) from None

    def all(self) -> list[Transaction]:
        """Snapshot of every transaction. Mutating the returned list does not affect the ledger."""
        return list(self._transactions.values())

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(txn.category for txn in self._transactions.values()))

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, txn_id: object) -> bool:
        return txn_id in self._transactions

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.all())
