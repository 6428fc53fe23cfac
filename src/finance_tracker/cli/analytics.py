#!/usr/bin/env python3
"""
Analytics CLI - Reports, Dashboard and Charts

Read-only views over the transaction history.
"""

from pathlib import Path
from typing import Optional

import click

from ..core.dates import FinancialDate
from .common import get_engine, handle_errors


@click.group()
def analytics() -> None:
    """Analytics and reporting commands."""
    pass


@analytics.command()
@click.option("--year", type=int, help="Report year (default: current year)")
@click.option("--month", type=click.IntRange(1, 12), help="Focus month 1-12 (default: current month)")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Also write the monthly series as CSV")
@click.pass_context
def report(ctx: click.Context, year: Optional[int], month: Optional[int], csv_path: Optional[str]) -> None:
    """
    Show the analytics report for a year, focused on one month.

    Examples:
      finance-tracker analytics report
      finance-tracker analytics report --year 2024 --month 3 --csv monthly.csv
    """
    engine = get_engine(ctx)
    config = engine.config.analytics
    today = FinancialDate.today()
    year = year or today.year
    month = month or today.month
    currency = engine.profile.currency

    view = engine.analytics()
    with handle_errors():
        result = view.report(year, month, config.top_categories, config.average_window_months)

    click.echo(f"Analytics Report: {year}")
    click.echo("=" * 60)
    click.echo(f"\n{'Month':<6}{'Income':>18}{'Expense':>18}{'Net':>18}")
    for totals in result.monthly:
        click.echo(
            f"{totals.label:<6}{totals.income.format(currency):>18}"
            f"{totals.expense.format(currency):>18}{totals.net.format(currency):>18}"
        )

    focus_label = result.monthly[month - 1].label
    click.echo(f"\n{focus_label} {year}:")
    click.echo(f"  Income: {result.month_income.format(currency)}")
    click.echo(f"  Expenses: {result.month_expense.format(currency)}")
    click.echo(f"  Net: {result.month_net.format(currency)}")
    click.echo(f"  Savings Rate: {result.savings_rate:.1f}%")

    if result.top_categories:
        click.echo("\nTop Expense Categories:")
        for share in result.top_categories:
            click.echo(f"  {share.category:<20}{share.amount.format(currency):>18}  {share.percentage:5.1f}%")

    click.echo(f"\nAverages (up to {config.average_window_months} months to {focus_label}):")
    click.echo(f"  Income: {result.average_income.format(currency)}")
    click.echo(f"  Expenses: {result.average_expense.format(currency)}")

    click.echo(
        f"\nTransactions: {result.income_count} income, {result.expense_count} expense, "
        f"{result.recurring_count} recurring"
    )

    if csv_path:
        view.monthly_frame(year).to_csv(csv_path)
        click.echo(f"\n✅ Monthly series written to {csv_path}")


@analytics.command()
@click.pass_context
def dashboard(ctx: click.Context) -> None:
    """Show headline figures: net worth, this month, recent activity, goals and budgets."""
    engine = get_engine(ctx)
    summary = engine.dashboard()
    currency = engine.profile.currency

    click.echo("Dashboard")
    click.echo("=" * 60)
    click.echo(f"Total Balance: {summary.total_balance.format(currency)}")
    click.echo(f"This Month Income: {summary.month_income.format(currency)}")
    click.echo(f"This Month Expenses: {summary.month_expense.format(currency)}")
    click.echo(f"This Month Net: {summary.month_net.format(currency)}")

    click.echo("\nRecent Transactions:")
    if not summary.recent_transactions:
        click.echo("  None")
    for txn in summary.recent_transactions:
        sign = "+" if txn.is_income else "-"
        click.echo(f"  {txn.date}  {sign}{txn.amount.format(currency)}  {txn.category}")

    click.echo("\nGoals:")
    if not summary.goals:
        click.echo("  None")
    for progress in summary.goals:
        click.echo(f"  {progress.goal.title}: {progress.percentage:.1f}%")

    click.echo("\nBudget Overview:")
    if not summary.budgets:
        click.echo("  None")
    for item in summary.budgets:
        flag = "  OVER" if item.over_limit else ""
        click.echo(
            f"  {item.budget.category}: {item.budget.spent.format(currency)} / "
            f"{item.budget.limit.format(currency)} ({item.percentage:.1f}%){flag}"
        )


@analytics.command()
@click.option("--year", type=int, help="Chart year (default: current year)")
@click.option("--output-dir", type=click.Path(file_okay=False), help="Directory for the PNG")
@click.pass_context
def chart(ctx: click.Context, year: Optional[int], output_dir: Optional[str]) -> None:
    """
    Render the monthly income vs expenses bar chart.

    Example:
      finance-tracker analytics chart --year 2024
    """
    engine = get_engine(ctx)
    year = year or FinancialDate.today().year

    try:
        output_path = engine.analytics().generate_chart(year, Path(output_dir) if output_dir else None)
    except OSError as e:
        raise click.ClickException(f"Could not write chart: {e}") from e

    click.echo(f"✅ Chart written to {output_path}")


if __name__ == "__main__":
    analytics()
