from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from apollo_env.config.models import LoggingSettings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logging(settings: LoggingSettings) -> None:
    """Configure the root logger: stderr always, plus a daily rotating file when enabled."""
    root = logging.getLogger()
    root.setLevel(settings.level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_LOG_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.file.enabled:
        log_path = Path(settings.file.path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_path,
            when="midnight",
            backupCount=settings.file.rotation.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # aiohttp access/client chatter is only useful when debugging
    if root.level > logging.DEBUG:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
