import logging
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)
    # psycopg_pool logs every connection check at INFO
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
