"""Logging configuration for Spend Tracker.

Sets up logging to the console and, when a log directory is configured,
to a date-named file.
"""

import logging
from datetime import date

from tracker.config import Config

LOGGER_NAME = "spend_tracker"


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Streamlit reruns the script on every interaction
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(console_handler)

    if config.log_dir is not None:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        log_file_path = config.log_dir / f"spend-tracker-{date.today().isoformat()}.log"
        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(config.log_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)
