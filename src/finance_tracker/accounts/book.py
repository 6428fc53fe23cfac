#!/usr/bin/env python3
"""
Account Book and Net Worth Aggregation

Accounts hold user-maintained snapshot balances. They are not derived from
ledger transactions: adding an expense does not debit any account.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from finance_tracker.core.errors import NotFoundError, ValidationError
from finance_tracker.core.models import Account, AccountType, generate_id
from finance_tracker.core.money import Money

logger = logging.getLogger(__name__)

OTHER_GROUP = "other"
GROUP_ORDER = (*(t.value for t in AccountType), OTHER_GROUP)


def net_worth(accounts: Iterable[Account]) -> Money:
    """
    Signed sum of all balances.

    Credit accounts with negative balances reduce the total.
    """
    return Money.sum(account.balance for account in accounts)


def group_by_type(accounts: Iterable[Account]) -> dict[str, list[Account]]:
    """
    Partition accounts by type.

    Every recognized type and the ``other`` group are always present, in a
    fixed order. Accounts with unrecognized types go to ``other``; none are
    dropped.
    """
    groups: dict[str, list[Account]] = {name: [] for name in GROUP_ORDER}
    for account in accounts:
        account_type = account.account_type
        groups[account_type.value if account_type else OTHER_GROUP].append(account)
    return groups


@dataclass(frozen=True)
class AccountGroup:
    """Accounts of one type with their combined balance."""

    name: str
    accounts: tuple[Account, ...]
    total: Money


def balance_breakdown(accounts: Iterable[Account]) -> list[AccountGroup]:
    """Per-type totals for the breakdown view, skipping empty groups."""
    return [
        AccountGroup(name=name, accounts=tuple(members), total=net_worth(members))
        for name, members in group_by_type(accounts).items()
        if members
    ]


class AccountBook:
    """Holds accounts and their independently maintained balances."""

    def __init__(
        self,
        accounts: Iterable[Account] = (),
        default_currency: str = "USD",
        id_factory: Callable[[], str] = generate_id,
    ):
        self.default_currency = default_currency
        self._accounts: dict[str, Account] = {}
        self._id_factory = id_factory

        for account in accounts:
            if account.id in self._accounts:
                raise ValidationError(f"Duplicate account id: {account.id}", field="id")
            self._accounts[account.id] = account

    def get(self, account_id: str) -> Account:
        """Get an account by id, raising NotFoundError if absent."""
        try:
            return self._accounts[account_id]
        except KeyError:
            raise NotFoundError("Account", account_id) from None

    def all(self) -> list[Account]:
        """Snapshot of every account."""
        return list(self._accounts.values())

    def net_worth(self) -> Money:
        return net_worth(self._accounts.values())

    def breakdown(self) -> list[AccountGroup]:
        return balance_breakdown(self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def add(self, fields: Mapping[str, Any]) -> Account:
        """
        Create an account.

        Raises:
            ValidationError: If name, type or balance is malformed
        """
        account = Account.from_input(self._id_factory(), fields, self.default_currency)
        self._accounts[account.id] = account
        logger.info(f"Added {account.type} account {account.id} '{account.name}': {account.balance_display}")
        return account

    def edit(self, account_id: str, fields: Mapping[str, Any]) -> Account:
        """
        Replace an account's fields.

        Raises:
            NotFoundError: If no account has this id
            ValidationError: If any field is malformed (the old account is kept)
        """
        self.get(account_id)
        account = Account.from_input(account_id, fields, self.default_currency)
        self._accounts[account_id] = account
        logger.info(f"Edited account {account_id}")
        return account

    def delete(self, account_id: str) -> Account:
        """
        Remove an account.

        Raises:
            NotFoundError: If no account has this id
        """
        try:
            account = self._accounts.pop(account_id)
        except KeyError:
            raise NotFoundError("Account", account_id) from None
        logger.info(f"Deleted account {account_id} ('{account.name}')")
        return account
