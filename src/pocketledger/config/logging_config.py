"""Logging configuration."""

import logging
import sys
from typing import Optional

from pocketledger.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "uvicorn.access")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once for the process.

    ``level`` overrides ``Settings.log_level``; unknown level names fall back
    to INFO.
    """
    settings = get_settings()
    name = (level or settings.log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging at %s, backend %s", logging.getLevelName(numeric), settings.effective_backend()
    )
