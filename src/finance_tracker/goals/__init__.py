"""
Savings Goals Package

Savings targets advanced by explicit contributions.
"""

from .tracker import (
    GoalProgress,
    GoalTracker,
    contribute,
    days_remaining,
    goal_progress,
    progress,
    remaining,
)

__all__ = [
    "GoalProgress",
    "GoalTracker",
    "contribute",
    "days_remaining",
    "goal_progress",
    "progress",
    "remaining",
]
