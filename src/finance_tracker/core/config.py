#!/usr/bin/env python3
"""
Configuration Management for the Finance Tracker

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).

Configuration is ambient (paths, logging, thresholds). Domain state lives in
an explicitly constructed FinanceEngine, never in module globals.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class StorageConfig:
    """Persistence configuration settings."""

    store_dir: Path
    export_dir: Path


@dataclass
class BudgetConfig:
    """Budget status thresholds, as percentages of the limit."""

    warning_percent: float = 80.0
    over_percent: float = 100.0


@dataclass
class AnalyticsConfig:
    """Analytics and reporting configuration."""

    output_dir: Path
    chart_width: int = 12
    chart_height: int = 6
    top_categories: int = 5
    average_window_months: int = 6


@dataclass
class Config:
    """
    Main configuration class for the finance tracker.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path

    # Component configurations
    storage: StorageConfig
    budget: BudgetConfig
    analytics: AnalyticsConfig

    # Application settings
    default_currency: str = "USD"
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FINANCE_TRACKER_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_finance_tracker"
            base_dir = Path(os.getenv("FINANCE_TRACKER_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("FINANCE_TRACKER_DATA_DIR", "./data"))
        data_dir = base_dir.expanduser().resolve()

        storage = StorageConfig(
            store_dir=data_dir / "store",
            export_dir=data_dir / "exports",
        )

        budget = BudgetConfig(
            warning_percent=float(os.getenv("BUDGET_WARNING_PERCENT", "80")),
            over_percent=float(os.getenv("BUDGET_OVER_PERCENT", "100")),
        )

        analytics = AnalyticsConfig(
            output_dir=data_dir / "analytics" / "charts",
            chart_width=int(os.getenv("CHART_WIDTH", "12")),
            chart_height=int(os.getenv("CHART_HEIGHT", "6")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            storage=storage,
            budget=budget,
            analytics=analytics,
            default_currency=os.getenv("DEFAULT_CURRENCY", "USD").strip().upper(),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def ensure_directories(self) -> None:
        """Create the data directories if missing."""
        for directory in [self.data_dir, self.storage.store_dir, self.storage.export_dir]:
            directory.mkdir(parents=True, exist_ok=True)

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not 0 < self.budget.warning_percent < self.budget.over_percent:
            errors.append(
                "BUDGET_WARNING_PERCENT must be positive and below BUDGET_OVER_PERCENT "
                f"(got {self.budget.warning_percent} and {self.budget.over_percent})"
            )

        if self.analytics.chart_width <= 0 or self.analytics.chart_height <= 0:
            errors.append("Chart dimensions must be positive")

        if len(self.default_currency) != 3 or not self.default_currency.isalpha():
            errors.append(f"DEFAULT_CURRENCY must be a 3-letter code, got {self.default_currency!r}")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # matplotlib is chatty at DEBUG
        logging.getLogger("matplotlib").setLevel(logging.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary for display."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                result[field_name] = {
                    nested_name: str(nested_value) if isinstance(nested_value, Path) else nested_value
                    for nested_name, nested_value in field_value.__dict__.items()
                }
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


# Convenience functions
def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
