#!/usr/bin/env python3
"""
Goals CLI - Savings Targets

Create savings goals and record contributions towards them. Contributions are
separate from ledger transactions.
"""

from typing import Optional

import click

from ..goals.tracker import GoalProgress
from .common import drop_unset, get_engine, handle_errors


def _describe(progress: GoalProgress, currency: str) -> list[str]:
    goal = progress.goal
    lines = [
        f"  Saved: {goal.current_amount.format(currency)} of {goal.target_amount.format(currency)} "
        f"({progress.percentage:.1f}%)",
    ]
    if progress.is_completed:
        lines.append("  Status: completed")
    elif progress.is_overdue:
        lines.append(f"  Status: overdue by {-progress.days_remaining} days")
    else:
        lines.append(f"  Remaining: {progress.remaining.format(currency)} in {progress.days_remaining} days")
    return lines


@click.group()
def goals() -> None:
    """Savings goal commands."""
    pass


@goals.command()
@click.option("--title", required=True, help="Goal title")
@click.option("--target", required=True, help="Target amount")
@click.option("--deadline", required=True, help="Deadline (YYYY-MM-DD)")
@click.option("--current", default="0", help="Amount already saved")
@click.option("--category", default="", help="Category label")
@click.pass_context
def add(ctx: click.Context, title: str, target: str, deadline: str, current: str, category: str) -> None:
    """
    Create a savings goal.

    Example:
      finance-tracker goals add --title "Emergency fund" --target 5000 --deadline 2025-12-31
    """
    engine = get_engine(ctx)
    with handle_errors():
        goal = engine.add_goal(
            {
                "title": title,
                "target_amount": target,
                "current_amount": current,
                "deadline": deadline,
                "category": category,
            }
        )
    click.echo(f"✅ Added goal '{goal.title}'")
    click.echo(f"ID: {goal.id}")


@goals.command(name="list")
@click.pass_context
def list_goals(ctx: click.Context) -> None:
    """List goals with progress and time remaining."""
    engine = get_engine(ctx)
    report = engine.goal_tracker.progress_report()
    currency = engine.profile.currency

    if not report:
        click.echo("No goals defined.")
        return

    click.echo("Savings Goals:")
    click.echo("=" * 60)
    for progress in report:
        goal = progress.goal
        label = f"{goal.title} [{goal.category}]" if goal.category else goal.title
        click.echo(f"\n{label} (due {goal.deadline})")
        for line in _describe(progress, currency):
            click.echo(line)
        click.echo(f"  ID: {goal.id}")


@goals.command()
@click.argument("goal_id")
@click.argument("amount")
@click.pass_context
def contribute(ctx: click.Context, goal_id: str, amount: str) -> None:
    """
    Add a contribution to a goal.

    Example:
      finance-tracker goals contribute 3f2a... 250
    """
    engine = get_engine(ctx)
    with handle_errors():
        goal = engine.contribute_to_goal(goal_id, amount)
        progress = engine.goal_tracker.progress_report()
    current = next(p for p in progress if p.goal.id == goal.id)

    click.echo(f"✅ Contributed to '{goal.title}'")
    for line in _describe(current, engine.profile.currency):
        click.echo(line)


@goals.command()
@click.argument("goal_id")
@click.option("--title", help="New title")
@click.option("--target", help="New target amount")
@click.option("--deadline", help="New deadline (YYYY-MM-DD)")
@click.option("--current", help="New saved amount")
@click.option("--category", help="New category label")
@click.pass_context
def edit(
    ctx: click.Context,
    goal_id: str,
    title: Optional[str],
    target: Optional[str],
    deadline: Optional[str],
    current: Optional[str],
    category: Optional[str],
) -> None:
    """Edit a goal. Options not given keep their current values."""
    engine = get_engine(ctx)
    with handle_errors():
        existing = engine.goal_tracker.get(goal_id)
        fields = {
            **existing.to_dict(),
            **drop_unset(
                title=title,
                target_amount=target,
                deadline=deadline,
                current_amount=current,
                category=category,
            ),
        }
        goal = engine.edit_goal(goal_id, fields)
    click.echo(f"✅ Updated goal '{goal.title}'")


@goals.command()
@click.argument("goal_id")
@click.pass_context
def delete(ctx: click.Context, goal_id: str) -> None:
    """Delete a goal."""
    engine = get_engine(ctx)
    with handle_errors():
        goal = engine.delete_goal(goal_id)
    click.echo(f"✅ Deleted goal '{goal.title}'")


if __name__ == "__main__":
    goals()
