import logging
import tomllib

import pytest

from tracker.config import CONFIG_ENV_VAR, Config, get_config_path, load_config
from tracker.domain import BudgetConfig, SavingsGoal, Viewport
from tracker.logger import get_logger, setup_logging


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.toml") == Config.default()


def test_load_config_sections(tmp_path):
    path = tmp_path / "spend-tracker.toml"
    path.write_text(
        """
[budget]
monthly_limit = 1200

[goal]
title = "Laptop"
target = 3000.5

[chart]
width = 800
height = 400
padding = 24

[display]
currency_symbol = "$"

[logging]
level = "DEBUG"
log_dir = "%s"
""" % (tmp_path / "logs").as_posix(),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.monthly_limit == 1200
    assert config.goal_title == "Laptop"
    assert config.goal_target == 3000.5
    assert config.viewport == Viewport(800, 400, 24)
    assert config.currency_symbol == "$"
    assert config.log_level == "DEBUG"
    assert config.log_dir == tmp_path / "logs"


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "spend-tracker.toml"
    path.write_text("[budget]\nmonthly_limit = 0\n", encoding="utf-8")

    config = load_config(path)

    assert config.monthly_limit == 0
    assert config.goal_title == Config.default().goal_title
    assert config.chart_padding == 40


def test_malformed_file_raises(tmp_path):
    path = tmp_path / "spend-tracker.toml"
    path.write_text("[budget\nmonthly_limit = ", encoding="utf-8")

    with pytest.raises(tomllib.TOMLDecodeError):
        load_config(path)


def test_config_path_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.toml"))
    assert get_config_path() == tmp_path / "custom.toml"


def test_initial_state_uses_budget_and_goal():
    state = Config.default().initial_state()
    assert state.transactions == ()
    assert state.budget == BudgetConfig(50000)
    assert state.goal == SavingsGoal("New Car", 100000)


def test_setup_logging_writes_file(tmp_path):
    config = Config(**{**Config.default().__dict__, "log_dir": tmp_path / "logs", "log_level": "DEBUG"})

    logger = setup_logging(config)
    logger.debug("hello")

    assert logger is get_logger()
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert list((tmp_path / "logs").glob("spend-tracker-*.log"))

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
