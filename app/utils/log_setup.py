"""
Logging setup.

Configures loguru for the payout service.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger

from app.config.settings import Settings, settings as default_settings


def setup_logging(config: Settings | None = None) -> int:
    """
    Configure logger with console output and file rotation.

    Args:
        config: Settings to read level and log file from

    Returns:
        Id of the file sink
    """
    config = config or default_settings

    logger.remove()
    logger.add(sys.stderr, level=config.log_level)
    sink_id = logger.add(
        config.log_file,
        rotation="1 day",
        retention="7 days",
        level=config.log_level,
        encoding="utf-8",
    )

    logger.info(f"Payout service logging started ({config.environment})")
    return sink_id
