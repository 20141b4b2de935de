"""Centralized logging configuration."""

import logging
from typing import Optional

from config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"

# Third-party loggers that flood INFO with per-request noise.
QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "uvicorn.access")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger for the replay service.

    Args:
        level: Overrides settings.LOG_LEVEL when given (e.g. "DEBUG" to
               trace individual ledger rejections).
    """
    resolved = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        level=getattr(logging, resolved),
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured at %s (%s)", resolved, settings.ENVIRONMENT
    )
