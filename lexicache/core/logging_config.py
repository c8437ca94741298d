"""
Logging setup
"""
import logging
import sys
from typing import Optional

from lexicache.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging once for the process.

    Args:
        level: Log level name; defaults to LOG_LEVEL (DEBUG when settings.DEBUG)
    """
    if level is None:
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL

    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_lexicache", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._lexicache = True
        root.addHandler(handler)

    # Engine echo is noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
