#!/usr/bin/env python3
"""
Data CLI - Backups and Profile

Bulk export/import of every collection and profile settings.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from ..storage.json_store import JsonFileStore
from .common import drop_unset, get_engine, handle_errors


@click.group()
def data() -> None:
    """Backup, restore and profile commands."""
    pass


@data.command()
@click.argument("output_file", required=False, type=click.Path(dir_okay=False))
@click.pass_context
def export(ctx: click.Context, output_file: Optional[str]) -> None:
    """
    Export everything to a JSON or YAML backup (format chosen by suffix).

    Examples:
      finance-tracker data export
      finance-tracker data export backup.yaml
    """
    engine = get_engine(ctx)
    if output_file:
        path = Path(output_file)
    else:
        export_dir = engine.config.storage.export_dir
        export_dir.mkdir(parents=True, exist_ok=True)
        path = export_dir / f"{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}_backup.json"

    with handle_errors():
        written = engine.export_to_file(path)

    click.echo(f"✅ Exported to {written}")
    click.echo(
        f"  {len(engine.transactions())} transactions, {len(engine.budgets())} budgets, "
        f"{len(engine.goals())} goals, {len(engine.accounts())} accounts"
    )


@data.command(name="import")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_backup(ctx: click.Context, input_file: str, yes: bool) -> None:
    """
    Replace all data with the contents of a backup.

    The backup must contain transactions, budgets, goals and accounts; anything
    less is rejected and nothing changes.
    """
    engine = get_engine(ctx)
    if not yes and not click.confirm("This replaces all current data. Continue?"):
        click.echo("Cancelled.")
        return

    with handle_errors():
        engine.import_from_file(input_file)

    click.echo(f"✅ Imported {input_file}")
    click.echo(
        f"  {len(engine.transactions())} transactions, {len(engine.budgets())} budgets, "
        f"{len(engine.goals())} goals, {len(engine.accounts())} accounts"
    )


@data.command()
@click.option("--name", help="Display name")
@click.option("--email", help="Email address")
@click.option("--currency", help="Currency code for display and new accounts")
@click.option("--budget-alerts/--no-budget-alerts", default=None)
@click.option("--goal-reminders/--no-goal-reminders", default=None)
@click.option("--weekly-reports/--no-weekly-reports", default=None)
@click.option("--monthly-reports/--no-monthly-reports", default=None)
@click.pass_context
def profile(
    ctx: click.Context,
    name: Optional[str],
    email: Optional[str],
    currency: Optional[str],
    budget_alerts: Optional[bool],
    goal_reminders: Optional[bool],
    weekly_reports: Optional[bool],
    monthly_reports: Optional[bool],
) -> None:
    """Show the profile, updating any settings given."""
    engine = get_engine(ctx)
    fields = drop_unset(name=name, email=email, currency=currency)
    notifications = drop_unset(
        budget_alerts=budget_alerts,
        goal_reminders=goal_reminders,
        weekly_reports=weekly_reports,
        monthly_reports=monthly_reports,
    )
    if notifications:
        fields["notifications"] = notifications

    current = engine.profile
    if fields:
        with handle_errors():
            current = engine.update_profile(fields)
        click.echo("✅ Profile updated")

    click.echo("Profile:")
    click.echo(f"  Name: {current.name or '-'}")
    click.echo(f"  Email: {current.email or '-'}")
    click.echo(f"  Currency: {current.currency}")
    click.echo("  Notifications:")
    for setting, enabled in current.notifications.to_dict().items():
        click.echo(f"    {setting.replace('_', ' ')}: {'on' if enabled else 'off'}")


@data.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show where data is stored and how much there is."""
    engine = get_engine(ctx)
    click.echo(f"Data directory: {engine.config.data_dir}")

    store = engine.store
    if isinstance(store, JsonFileStore):
        click.echo(store.summary_text())
        age = store.age_days()
        if age is not None:
            click.echo(f"  Last saved: {store.last_modified():%Y-%m-%d %H:%M} ({age} days ago)")
            click.echo(f"  Size: {store.size_bytes()} bytes")

    click.echo(
        f"  {len(engine.transactions())} transactions, {len(engine.budgets())} budgets, "
        f"{len(engine.goals())} goals, {len(engine.accounts())} accounts"
    )
    if engine.unsaved_keys:
        click.echo(f"⚠️  Unsaved changes: {', '.join(sorted(engine.unsaved_keys))}")


if __name__ == "__main__":
    data()
