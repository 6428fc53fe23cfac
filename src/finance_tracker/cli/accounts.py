#!/usr/bin/env python3
"""
Accounts CLI - Balances and Net Worth

Accounts hold user-maintained balances; they are not derived from transactions.
"""

from typing import Optional

import click

from ..core.models import AccountType
from .common import drop_unset, get_engine, handle_errors


@click.group()
def accounts() -> None:
    """Account balance commands."""
    pass


@accounts.command()
@click.option("--name", required=True, help="Account name")
@click.option(
    "--type",
    "account_type",
    required=True,
    help=f"Account type ({', '.join(t.value for t in AccountType)})",
)
@click.option("--balance", default="0", help="Current balance (negative for amounts owed)")
@click.option("--currency", help="Currency code (default: profile currency)")
@click.option("--description", default="", help="Free-text description")
@click.pass_context
def add(
    ctx: click.Context,
    name: str,
    account_type: str,
    balance: str,
    currency: Optional[str],
    description: str,
) -> None:
    """
    Add an account.

    Example:
      finance-tracker accounts add --name "Visa" --type credit --balance -1500
    """
    engine = get_engine(ctx)
    with handle_errors():
        account = engine.add_account(
            drop_unset(name=name, type=account_type, balance=balance, currency=currency, description=description)
        )
    click.echo(f"✅ Added {account.type} account '{account.name}': {account.balance_display}")
    click.echo(f"ID: {account.id}")
    if account.account_type is None:
        click.echo(f"  Note: '{account.type}' is not a standard type; it is grouped under 'other'")


@accounts.command(name="list")
@click.pass_context
def list_accounts(ctx: click.Context) -> None:
    """List accounts grouped by type, with net worth."""
    engine = get_engine(ctx)
    currency = engine.profile.currency
    groups = engine.account_breakdown()

    if not groups:
        click.echo("No accounts defined.")
        return

    click.echo("Accounts:")
    click.echo("=" * 60)
    for group in groups:
        click.echo(f"\n{group.name.title()} ({group.total.format(currency)})")
        for account in group.accounts:
            click.echo(f"  {account.name}: {account.balance_display}  [{account.id}]")

    click.echo(f"\n{'-' * 60}")
    click.echo(f"Net Worth: {engine.net_worth().format(currency)}")


@accounts.command()
@click.argument("account_id")
@click.option("--name", help="New name")
@click.option("--type", "account_type", help="New type")
@click.option("--balance", help="New balance")
@click.option("--currency", help="New currency code")
@click.option("--description", help="New description")
@click.pass_context
def edit(
    ctx: click.Context,
    account_id: str,
    name: Optional[str],
    account_type: Optional[str],
    balance: Optional[str],
    currency: Optional[str],
    description: Optional[str],
) -> None:
    """Edit an account. Options not given keep their current values."""
    engine = get_engine(ctx)
    with handle_errors():
        existing = engine.account_book.get(account_id)
        fields = {
            **existing.to_dict(),
            **drop_unset(
                name=name,
                type=account_type,
                balance=balance,
                currency=currency,
                description=description,
            ),
        }
        account = engine.edit_account(account_id, fields)
    click.echo(f"✅ Updated account '{account.name}': {account.balance_display}")


@accounts.command()
@click.argument("account_id")
@click.pass_context
def delete(ctx: click.Context, account_id: str) -> None:
    """Delete an account."""
    engine = get_engine(ctx)
    with handle_errors():
        account = engine.delete_account(account_id)
    click.echo(f"✅ Deleted account '{account.name}'")


if __name__ == "__main__":
    accounts()
