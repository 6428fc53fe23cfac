"""
Test Suite for the Finance Tracker

Test Structure:
- unit/: Unit tests mirroring the src/ package structure
- integration/: Engine workflows and CLI command execution

Test Categories:
- Core utilities (money, currency, dates, models, config)
- Ledger, budgets, goals and accounts
- Aggregation and analytics
- Storage and backups

Test Data:
All test data is synthetic.
"""
