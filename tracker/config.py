"""Configuration management for Spend Tracker.

Reads configuration from ~/.config/spend-tracker.toml (or the file named by
SPEND_TRACKER_CONFIG). A missing file means defaults; nothing is written back.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tracker.domain import AppState, BudgetConfig, SavingsGoal, Viewport

CONFIG_ENV_VAR = "SPEND_TRACKER_CONFIG"


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    monthly_limit: float
    goal_title: str
    goal_target: float
    chart_width: float
    chart_height: float
    chart_padding: float
    currency_symbol: str
    log_level: str
    log_dir: Optional[Path]

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        return cls(
            monthly_limit=50000.0,
            goal_title="New Car",
            goal_target=100000.0,
            chart_width=600.0,
            chart_height=300.0,
            chart_padding=40.0,
            currency_symbol="₹",
            log_level="INFO",
            log_dir=None,
        )

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.chart_width, self.chart_height, self.chart_padding)

    def initial_state(self) -> AppState:
        """Starting application state: empty ledger, configured budget and goal."""
        return AppState(
            budget=BudgetConfig(monthly_limit=self.monthly_limit),
            goal=SavingsGoal(title=self.goal_title, target=self.goal_target),
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".config" / "spend-tracker.toml"


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Args:
        path: Explicit config file. Defaults to get_config_path().

    Returns:
        Config object with loaded or default values.

    Raises:
        tomllib.TOMLDecodeError: If the file exists but is not valid TOML.
    """
    config_path = path or get_config_path()
    defaults = Config.default()

    if not config_path.exists():
        return defaults

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    budget_config = data.get("budget", {})
    goal_config = data.get("goal", {})
    chart_config = data.get("chart", {})
    display_config = data.get("display", {})
    log_config = data.get("logging", {})

    log_dir = log_config.get("log_dir")

    return Config(
        monthly_limit=float(budget_config.get("monthly_limit", defaults.monthly_limit)),
        goal_title=goal_config.get("title", defaults.goal_title),
        goal_target=float(goal_config.get("target", defaults.goal_target)),
        chart_width=float(chart_config.get("width", defaults.chart_width)),
        chart_height=float(chart_config.get("height", defaults.chart_height)),
        chart_padding=float(chart_config.get("padding", defaults.chart_padding)),
        currency_symbol=display_config.get("currency_symbol", defaults.currency_symbol),
        log_level=log_config.get("level", defaults.log_level),
        log_dir=Path(log_dir) if log_dir else None,
    )
