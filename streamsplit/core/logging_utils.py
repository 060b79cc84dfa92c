# File: streamsplit/core/logging_utils.py

import logging
from typing import Optional

from streamsplit.core.config.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Libraries that flood INFO/DEBUG with connection chatter
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configures the root logger for the CLI.
    The --log-level flag wins over settings.LOG_LEVEL; unknown names fall back to INFO.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
