#!/usr/bin/env python3
"""
Budgets CLI - Category Spending Caps

Create and review budgets. Spent totals are derived from expense transactions
in the budget's category and are never entered by hand.
"""

from typing import Optional

import click

from ..budgets.tracker import BudgetStatus
from ..core.models import BudgetPeriod
from .common import drop_unset, get_engine, handle_errors

PERIOD_CHOICE = click.Choice([p.value for p in BudgetPeriod])

STATUS_MARKERS = {
    BudgetStatus.GOOD: "✅",
    BudgetStatus.WARNING: "⚠️ ",
    BudgetStatus.OVER: "❌",
}


@click.group()
def budgets() -> None:
    """Budget tracking commands."""
    pass


@budgets.command()
@click.option("--category", required=True, help="Expense category to track (exact match)")
@click.option("--limit", "limit_amount", required=True, help="Spending limit")
@click.option("--period", type=PERIOD_CHOICE, default=BudgetPeriod.MONTHLY.value, help="Budget period label")
@click.pass_context
def add(ctx: click.Context, category: str, limit_amount: str, period: str) -> None:
    """
    Create a budget for a category.

    Example:
      finance-tracker budgets add --category Food --limit 400
    """
    engine = get_engine(ctx)
    with handle_errors():
        budget = engine.add_budget({"category": category, "limit": limit_amount, "period": period})
        status = engine.budget_status(budget.id)

    currency = engine.profile.currency
    click.echo(f"✅ Added {budget.period.value} budget for '{budget.category}'")
    click.echo(f"ID: {budget.id}")
    click.echo(f"Spent so far: {budget.spent.format(currency)} of {budget.limit.format(currency)} ({status.value})")


@budgets.command(name="list")
@click.pass_context
def list_budgets(ctx: click.Context) -> None:
    """
    List budgets with spent totals and status.

    Status is good below 80%, warning from 80% and over from 100% of the limit.
    """
    engine = get_engine(ctx)
    tracker = engine.budget_tracker
    currency = engine.profile.currency

    if not len(tracker):
        click.echo("No budgets defined.")
        return

    click.echo("Budgets:")
    click.echo("=" * 60)
    for budget in tracker.all():
        status = tracker.status(budget)
        click.echo(f"\n{STATUS_MARKERS[status]} {budget.category} ({budget.period.value})")
        click.echo(f"  Spent: {budget.spent.format(currency)} of {budget.limit.format(currency)}")
        click.echo(f"  Used: {tracker.percentage(budget):.1f}% [{status.value}]")
        click.echo(f"  ID: {budget.id}")

    summary = tracker.summary()
    click.echo(f"\n{'-' * 60}")
    click.echo(
        f"Total: {summary.count} budgets, {summary.total_spent.format(currency)} of "
        f"{summary.total_limit.format(currency)} ({summary.percentage:.1f}%)"
    )


@budgets.command()
@click.argument("budget_id")
@click.option("--category", help="New category")
@click.option("--limit", "limit_amount", help="New limit")
@click.option("--period", type=PERIOD_CHOICE, help="New period label")
@click.pass_context
def edit(
    ctx: click.Context,
    budget_id: str,
    category: Optional[str],
    limit_amount: Optional[str],
    period: Optional[str],
) -> None:
    """Edit a budget. Spent is recomputed for the new category."""
    engine = get_engine(ctx)
    with handle_errors():
        current = engine.budget_tracker.get(budget_id)
        fields = {**current.to_dict(), **drop_unset(category=category, limit=limit_amount, period=period)}
        budget = engine.edit_budget(budget_id, fields)
        status = engine.budget_status(budget_id)

    currency = engine.profile.currency
    click.echo(
        f"✅ Updated budget '{budget.category}': {budget.spent.format(currency)} of "
        f"{budget.limit.format(currency)} ({status.value})"
    )


@budgets.command()
@click.argument("budget_id")
@click.pass_context
def delete(ctx: click.Context, budget_id: str) -> None:
    """Delete a budget. Transactions are not affected."""
    engine = get_engine(ctx)
    with handle_errors():
        budget = engine.delete_budget(budget_id)
    click.echo(f"✅ Deleted budget for '{budget.category}'")


if __name__ == "__main__":
    budgets()
