#!/usr/bin/env python3
"""
Main CLI Entry Point for the Finance Tracker

Provides a unified command-line interface for every tracker operation.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Personal Finance Tracker

    Track transactions, budgets, savings goals and accounts, with analytics
    over your transaction history.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        os.environ["FINANCE_TRACKER_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("finance_tracker").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    try:
        ctx.obj["config"] = reload_config() if (config_env or debug) else get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from finance_tracker import __author__, __version__

    click.echo(f"Finance Tracker v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Store Directory: {config_obj.storage.store_dir}")
    click.echo(f"  Chart Directory: {config_obj.analytics.output_dir}")
    click.echo(
        f"  Budget Thresholds: warning {config_obj.budget.warning_percent:g}%, "
        f"over {config_obj.budget.over_percent:g}%"
    )
    click.echo(f"  Default Currency: {config_obj.default_currency}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


# Import command groups
from .accounts import accounts  # noqa: E402
from .analytics import analytics  # noqa: E402
from .budgets import budgets  # noqa: E402
from .data import data  # noqa: E402
from .goals import goals  # noqa: E402
from .transactions import transactions  # noqa: E402

main.add_command(transactions)
main.add_command(budgets)
main.add_command(goals)
main.add_command(accounts)
main.add_command(analytics)
main.add_command(data)


if __name__ == "__main__":
    main()
