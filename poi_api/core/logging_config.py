import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from poi_api.core.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(settings: Settings = default_settings) -> str:
    """
    Route the root logger to a rotating file under ``LOG_DIR`` and to stdout.

    SQL statements are only logged when ``DB_ECHO`` is on. Calling it again
    replaces the handlers instead of stacking them. Returns the log file path.
    """
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILENAME)

    fmt = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        filename=log_path,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setFormatter(fmt)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(fmt)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        handlers=[file_handler, stream_handler],
        force=True,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )
    return log_path
