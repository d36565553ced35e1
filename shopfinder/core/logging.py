from __future__ import annotations

import logging
import sys

from .config import get_settings

# Third-party loggers that are chatty at DEBUG
_QUIET_LOGGERS = ("httpx", "slowapi")


def configure_logging() -> None:
    """Send log records to stdout and set the ``shopfinder`` logger level.

    ``LOG_LEVEL`` wins when set; otherwise development logs at DEBUG and
    production at INFO.
    """
    settings = get_settings()
    level = settings.log_level or ("INFO" if settings.environment == "production" else "DEBUG")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("shopfinder").setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
