"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import itertools
import tempfile
from pathlib import Path
from typing import Any

import pytest

from finance_tracker.core.config import reload_config
from finance_tracker.engine import FinanceEngine
from finance_tracker.storage.memory_store import InMemoryStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def engine(memory_store, sequential_ids) -> FinanceEngine:
    """Engine over an empty in-memory store."""
    return FinanceEngine(memory_store, id_factory=sequential_ids)


@pytest.fixture
def sample_transactions() -> list[dict[str, Any]]:
    """A small mixed ledger across two months."""
    return [
        {"type": "income", "amount": "3000.00", "category": "Salary", "date": "2024-01-31", "recurring": True},
        {"type": "expense", "amount": "120.50", "category": "Food", "date": "2024-01-05"},
        {"type": "expense", "amount": "45.25", "category": "Transport", "date": "2024-01-12"},
        {"type": "expense", "amount": "80.00", "category": "Food", "date": "2024-02-03"},
        {"type": "income", "amount": "200.00", "category": "Freelance", "date": "2024-02-10"},
        {"type": "expense", "amount": "1200.00", "category": "Rent", "date": "2024-02-01", "recurring": True},
    ]


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """A complete backup document."""
    return {
        "version": 1,
        "transactions": [
            {
                "id": "t1",
                "type": "expense",
                "amount": "150.00",
                "category": "Food",
                "description": "Groceries",
                "date": "2024-01-05",
                "recurring": False,
            },
            {
                "id": "t2",
                "type": "income",
                "amount": "2500.00",
                "category": "Salary",
                "description": "",
                "date": "2024-01-31",
                "recurring": True,
            },
        ],
        "budgets": [{"id": "b1", "category": "Food", "limit": "120.00", "period": "monthly", "spent": "0.00"}],
        "goals": [
            {
                "id": "g1",
                "title": "Emergency fund",
                "category": "Savings",
                "target_amount": "1000.00",
                "current_amount": "200.00",
                "deadline": "2030-12-31",
            }
        ],
        "accounts": [
            {"id": "a1", "name": "Checking", "type": "checking", "balance": "5000.00", "currency": "USD"},
        ],
        "profile": {"name": "Test User", "email": "test@example.com", "currency": "USD"},
    }


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("FINANCE_TRACKER_ENV", "test")
    monkeypatch.setenv("FINANCE_TRACKER_DATA_DIR", str(tmp_path / "finance_data"))
    for name in ("BUDGET_WARNING_PERCENT", "BUDGET_OVER_PERCENT", "DEFAULT_CURRENCY", "LOG_LEVEL", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    reload_config()


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for money handling and precision")
    config.addinivalue_line("markers", "ledger: Tests for the transaction ledger")
    config.addinivalue_line("markers", "budgets: Tests for budget tracking")
    config.addinivalue_line("markers", "goals: Tests for savings goals")
    config.addinivalue_line("markers", "accounts: Tests for accounts and net worth")
    config.addinivalue_line("markers", "analytics: Tests for aggregation and analytics")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
