#!/usr/bin/env python3
"""
Transactions CLI - Ledger Management

Record, list, edit and delete income and expense transactions. Every change
brings budget spent totals up to date before it is saved.
"""

from typing import Optional

import click

from ..analysis.aggregator import filter_transactions, recent_transactions, sum_by_type
from ..core.dates import FinancialDate
from ..core.models import Transaction, TransactionType
from .common import drop_unset, get_engine, handle_errors, is_verbose

TYPE_CHOICE = click.Choice([t.value for t in TransactionType])


def _format_line(txn: Transaction, currency: str) -> str:
    sign = "+" if txn.is_income else "-"
    line = f"{txn.date}  {sign}{txn.amount.format(currency):>16}  {txn.category:<16} {txn.description}"
    return f"{line.rstrip()}  [{txn.id}]"


def _echo_status_changes(changes: list) -> None:
    for change in changes:
        click.echo(f"  Budget '{change.category}' is now {change.current.value} ({change.percentage:.1f}%)")


@click.group()
def transactions() -> None:
    """Income and expense transaction commands."""
    pass


@transactions.command()
@click.option("--type", "txn_type", type=TYPE_CHOICE, required=True, help="Transaction type")
@click.option("--amount", required=True, help="Amount (e.g. 12.50)")
@click.option("--category", required=True, help="Category label")
@click.option("--date", "date_str", help="Transaction date (YYYY-MM-DD, default: today)")
@click.option("--description", default="", help="Free-text description")
@click.option("--recurring", is_flag=True, help="Mark as recurring")
@click.pass_context
def add(
    ctx: click.Context,
    txn_type: str,
    amount: str,
    category: str,
    date_str: Optional[str],
    description: str,
    recurring: bool,
) -> None:
    """
    Record a new transaction.

    Examples:
      finance-tracker transactions add --type expense --amount 42.10 --category Food
      finance-tracker transactions add --type income --amount 2500 --category Salary --date 2024-01-31
    """
    engine = get_engine(ctx)
    changes: list = []
    engine.subscribe_budget_changes(changes.append)

    with handle_errors():
        txn = engine.add_transaction(
            {
                "type": txn_type,
                "amount": amount,
                "category": category,
                "date": date_str or FinancialDate.today(),
                "description": description,
                "recurring": recurring,
            }
        )

    click.echo(f"✅ Added {txn.type.value} {txn.amount.format(engine.profile.currency)} ({txn.category})")
    click.echo(f"ID: {txn.id}")
    _echo_status_changes(changes)


@transactions.command(name="list")
@click.option("--search", default="", help="Match description or category (case-insensitive)")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Only this type")
@click.option("--category", help="Only this exact category")
@click.option("--month", help="Only this month (YYYY-MM)")
@click.option("--limit", type=int, default=0, help="Show at most this many (newest first, 0 = all)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def list_transactions(
    ctx: click.Context,
    search: str,
    txn_type: Optional[str],
    category: Optional[str],
    month: Optional[str],
    limit: int,
    verbose: bool,
) -> None:
    """
    List transactions, newest first.

    Example:
      finance-tracker transactions list --type expense --month 2024-01
    """
    engine = get_engine(ctx)
    currency = engine.profile.currency

    with handle_errors():
        matches = filter_transactions(engine.transactions(), search, txn_type, category, month)
    ordered = recent_transactions(matches, limit if limit > 0 else len(matches))

    if not ordered:
        click.echo("No transactions found.")
        return

    if is_verbose(ctx, verbose):
        click.echo(f"Showing {len(ordered)} of {len(engine.transactions())} transactions")
        click.echo()

    for txn in ordered:
        click.echo(_format_line(txn, currency))

    income = sum_by_type(matches, TransactionType.INCOME)
    expense = sum_by_type(matches, TransactionType.EXPENSE)
    click.echo(f"\n{'-' * 60}")
    click.echo(f"Income: {income.format(currency)}  Expenses: {expense.format(currency)}")


@transactions.command()
@click.argument("txn_id")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="New type")
@click.option("--amount", help="New amount")
@click.option("--category", help="New category")
@click.option("--date", "date_str", help="New date (YYYY-MM-DD)")
@click.option("--description", help="New description")
@click.option("--recurring/--not-recurring", default=None, help="Change the recurring flag")
@click.pass_context
def edit(
    ctx: click.Context,
    txn_id: str,
    txn_type: Optional[str],
    amount: Optional[str],
    category: Optional[str],
    date_str: Optional[str],
    description: Optional[str],
    recurring: Optional[bool],
) -> None:
    """Edit a transaction. Options not given keep their current values."""
    engine = get_engine(ctx)
    changes: list = []
    engine.subscribe_budget_changes(changes.append)

    with handle_errors():
        current = engine.get_transaction(txn_id)
        fields = {
            **current.to_dict(),
            **drop_unset(
                type=txn_type,
                amount=amount,
                category=category,
                date=date_str,
                description=description,
                recurring=recurring,
            ),
        }
        txn = engine.edit_transaction(txn_id, fields)

    click.echo(f"✅ Updated: {_format_line(txn, engine.profile.currency)}")
    _echo_status_changes(changes)


@transactions.command()
@click.argument("txn_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx: click.Context, txn_id: str, yes: bool) -> None:
    """Delete a transaction."""
    engine = get_engine(ctx)
    changes: list = []
    engine.subscribe_budget_changes(changes.append)

    with handle_errors():
        txn = engine.get_transaction(txn_id)
        if not yes and not click.confirm(f"Delete {_format_line(txn, engine.profile.currency)}?"):
            click.echo("Cancelled.")
            return
        engine.delete_transaction(txn_id)

    click.echo(f"✅ Deleted transaction {txn_id}")
    _echo_status_changes(changes)


if __name__ == "__main__":
    transactions()
