"""
SurfSpots Backend — Logging Configuration
===========================================

What:  One-time setup of the standard library logging for the API and CLI.
How:   Configures the root logger with a timestamped format on stdout and
       lowers noisy third-party loggers to WARNING.
When:  Called first thing in the app lifespan and in the CLI entry point.
"""

import logging
import sys
from typing import Optional

from surfspots.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

NOISY_LOGGERS = (
    "uvicorn.access",
    "sqlalchemy.engine",
    "httpcore",
    "httpx",
)


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for the entire process.

    Args:
        level: Level name overriding ``settings.log_level``.
    """
    level_name = (level or settings.log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
