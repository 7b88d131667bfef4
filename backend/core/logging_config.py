# backend/core/logging_config.py

"""
Root logging setup shared by the API process and batch workers.
"""

import logging
from typing import Optional

from .config import settings

LOG_FORMAT = "%(levelname)s [%(asctime)s] %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single stream handler to the root logger.

    Calling this more than once only updates the level.
    """
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())

    if not any(getattr(h, "_salon_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._salon_handler = True
        root.addHandler(handler)

    if settings.log_sql_queries:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
