"""
Command Line Interface Package

Unified CLI for the finance tracker.

Command Structure:
- finance-tracker: Main entry point with utility commands (version, config)
- finance-tracker transactions: Record, list, edit and delete transactions
- finance-tracker budgets: Manage budgets and view their status
- finance-tracker goals: Manage savings goals and contributions
- finance-tracker accounts: Manage accounts and view net worth
- finance-tracker analytics: Reports, dashboard and charts
- finance-tracker data: Backups and profile settings
"""
