"""
Logging Setup
Routes informational output to stdout and errors to stderr
"""

import sys
from typing import Optional
from loguru import logger


def configure_logging(log_file: Optional[str] = None, level: str = "INFO"):
    """
    Configure loguru sinks for a deployment run

    Args:
        log_file: Optional file sink with daily rotation
        level: Minimum level for the console sinks
    """
    logger.remove()

    # Plain messages so the deployment lines can be parsed by callers
    logger.add(
        sys.stdout,
        format="{message}",
        level=level,
        filter=lambda record: record["level"].no < logger.level("ERROR").no
    )
    logger.add(
        sys.stderr,
        format="<red>{level}</red>: {message}",
        level="ERROR"
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )
