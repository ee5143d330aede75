"""
Logging Setup
Single stream handler for the whole application
"""

import logging
from typing import Optional

from clubhouse.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging, using LOG_LEVEL from settings by default"""
    level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig leaves the level alone when a handler already exists
    logging.getLogger().setLevel(level)
