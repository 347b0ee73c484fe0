from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from config_client.config.models import LoggingSettings

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logging(settings: LoggingSettings) -> None:
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {settings.level}")

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.file.enabled:
        path = Path(settings.file.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            path,
            when="midnight",
            backupCount=settings.file.rotation.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # aiohttp logs every connection at DEBUG.
    logging.getLogger("aiohttp").setLevel(max(level, logging.INFO))
