#!/usr/bin/env python3
"""
Integration tests for the CLI

Tests end-to-end command execution against a JSON store in a temporary data
directory.
"""

import json
import re

import pytest
from click.testing import CliRunner

from finance_tracker.cli.main import main
from finance_tracker.core.config import get_config
from finance_tracker.engine import FinanceEngine


def _expense_args(amount: str, category: str, date: str) -> list[str]:
    return ["transactions", "add", "--type", "expense", "--amount", amount, "--category", category, "--date", date]


def _created_id(output: str) -> str:
    match = re.search(r"^ID: (\S+)$", output, re.MULTILINE)
    assert match, output
    return match.group(1)


@pytest.mark.integration
class TestCLIMain:
    """Test main CLI entry point."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_help_lists_all_groups(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Personal Finance Tracker" in result.output
        for command in ["transactions", "budgets", "goals", "accounts", "analytics", "data", "version", "config"]:
            assert command in result.output

    def test_version_command(self):
        result = self.runner.invoke(main, ["version"])
        assert result.exit_code == 0
        assert "Finance Tracker v" in result.output
        assert "Author:" in result.output

    def test_config_command(self):
        result = self.runner.invoke(main, ["config"])
        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Environment: test" in result.output
        assert "Budget Thresholds: warning 80%, over 100%" in result.output

    def test_verbose_flag(self):
        result = self.runner.invoke(main, ["--verbose", "config"])
        assert result.exit_code == 0
        assert "Data directory:" in result.output

    def test_config_env_override(self, monkeypatch):
        monkeypatch.setenv("FINANCE_TRACKER_ENV", "test")
        result = self.runner.invoke(main, ["--config-env", "development", "config"])
        assert result.exit_code == 0
        assert "Environment: development" in result.output

    def test_invalid_command(self):
        result = self.runner.invoke(main, ["invalid-command"])
        assert result.exit_code != 0


@pytest.mark.integration
class TestTransactionAndBudgetCommands:
    """Ledger and budget commands share one persisted store."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_over_budget_workflow(self):
        result = self.runner.invoke(main, ["budgets", "add", "--category", "Food", "--limit", "120"])
        assert result.exit_code == 0, result.output
        budget_id = _created_id(result.output)

        result = self.runner.invoke(main, _expense_args("150", "Food", "2024-01-05"))
        assert result.exit_code == 0, result.output
        assert "Budget 'Food' is now over (125.0%)" in result.output

        result = self.runner.invoke(main, ["budgets", "list"])
        assert result.exit_code == 0
        assert "Used: 125.0% [over]" in result.output
        assert budget_id in result.output

    def test_list_filters(self):
        for args in [
            ["--type", "income", "--amount", "2500", "--category", "Salary", "--date", "2024-01-31"],
            ["--type", "expense", "--amount", "42.10", "--category", "Food", "--date", "2024-02-02"],
        ]:
            assert self.runner.invoke(main, ["transactions", "add", *args]).exit_code == 0

        result = self.runner.invoke(main, ["transactions", "list", "--month", "2024-02"])
        assert result.exit_code == 0
        assert "Food" in result.output
        assert "Salary" not in result.output
        assert "Expenses: USD 42.10" in result.output

    def test_edit_keeps_unspecified_fields(self):
        result = self.runner.invoke(main, _expense_args("10", "Fun", "2024-03-01"))
        txn_id = _created_id(result.output)

        result = self.runner.invoke(main, ["transactions", "edit", txn_id, "--amount", "12.5"])
        assert result.exit_code == 0, result.output

        txn = FinanceEngine.from_config(get_config()).get_transaction(txn_id)
        assert str(txn.amount) == "12.50"
        assert txn.category == "Fun"

    def test_invalid_amount_is_reported(self):
        result = self.runner.invoke(
            main, ["transactions", "add", "--type", "expense", "--amount", "abc", "--category", "Food"]
        )
        assert result.exit_code != 0
        assert "not a valid number" in result.output

    def test_delete_missing_transaction(self):
        result = self.runner.invoke(main, ["transactions", "delete", "missing", "--yes"])
        assert result.exit_code != 0
        assert "Transaction not found: missing" in result.output


@pytest.mark.integration
class TestGoalAccountAnalyticsCommands:
    """Goals, accounts, analytics and data commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_goal_contribution(self):
        result = self.runner.invoke(
            main,
            ["goals", "add", "--title", "Trip", "--target", "1000", "--current", "200", "--deadline", "2030-01-01"],
        )
        goal_id = _created_id(result.output)

        result = self.runner.invoke(main, ["goals", "contribute", goal_id, "50"])
        assert result.exit_code == 0, result.output
        assert "Saved: USD 250.00 of USD 1,000.00 (25.0%)" in result.output

        result = self.runner.invoke(main, ["goals", "contribute", goal_id, "-10"])
        assert result.exit_code != 0

    def test_accounts_net_worth(self):
        for name, account_type, balance in [
            ("Checking", "checking", "5000"),
            ("Savings", "savings", "10000"),
            ("Visa", "credit", "-2500"),
        ]:
            result = self.runner.invoke(
                main, ["accounts", "add", "--name", name, "--type", account_type, "--balance", balance]
            )
            assert result.exit_code == 0, result.output

        result = self.runner.invoke(main, ["accounts", "list"])
        assert "Net Worth: USD 12,500.00" in result.output

    def test_analytics_report_and_csv(self, temp_dir):
        self.runner.invoke(main, _expense_args("80", "Food", "2024-03-03"))
        csv_path = temp_dir / "monthly.csv"
        result = self.runner.invoke(
            main, ["analytics", "report", "--year", "2024", "--month", "3", "--csv", str(csv_path)]
        )
        assert result.exit_code == 0, result.output
        assert "Top Expense Categories:" in result.output
        assert "100.0%" in result.output
        assert csv_path.read_text().splitlines()[0] == "Month,Income,Expense,Net"

    @pytest.mark.slow
    def test_analytics_chart(self, temp_dir):
        result = self.runner.invoke(main, ["analytics", "chart", "--year", "2024", "--output-dir", str(temp_dir)])
        assert result.exit_code == 0, result.output
        assert (temp_dir / "monthly_2024.png").exists()

    def test_dashboard(self):
        result = self.runner.invoke(main, ["analytics", "dashboard"])
        assert result.exit_code == 0
        assert "Total Balance: USD 0.00" in result.output
        assert "Budget Overview:" in result.output

    def test_dashboard_budget_overview(self):
        assert self.runner.invoke(main, ["budgets", "add", "--category", "Food", "--limit", "120"]).exit_code == 0
        assert self.runner.invoke(main, _expense_args("150", "Food", "2024-01-05")).exit_code == 0

        result = self.runner.invoke(main, ["analytics", "dashboard"])
        assert result.exit_code == 0, result.output
        assert "Food: USD 150.00 / USD 120.00 (125.0%)  OVER" in result.output

    def test_oversized_amount_is_a_clean_error(self):
        result = self.runner.invoke(main, _expense_args("1e30", "Food", "2024-01-05"))
        assert result.exit_code == 1
        assert "too large" in result.output
        assert "Traceback" not in result.output

    def test_export_and_rejected_import(self, temp_dir, sample_document):
        backup = temp_dir / "in.json"
        backup.write_text(json.dumps(sample_document))
        result = self.runner.invoke(main, ["data", "import", str(backup), "--yes"])
        assert result.exit_code == 0, result.output

        out = temp_dir / "out.yaml"
        result = self.runner.invoke(main, ["data", "export", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()

        del sample_document["goals"]
        backup.write_text(json.dumps(sample_document))
        result = self.runner.invoke(main, ["data", "import", str(backup), "--yes"])
        assert result.exit_code != 0
        assert "missing required collections: goals" in result.output

        result = self.runner.invoke(main, ["data", "status"])
        assert "2 transactions" in result.output

    def test_profile_update(self):
        result = self.runner.invoke(main, ["data", "profile", "--name", "Pat", "--currency", "eur", "--weekly-reports"])
        assert result.exit_code == 0, result.output
        assert "Currency: EUR" in result.output
        assert "weekly reports: on" in result.output
