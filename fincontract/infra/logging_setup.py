"""Logging setup for applications and tools built on fincontract.

Library modules only create loggers; configuring handlers is left to the
application, which calls setup_logging once at startup.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(log_level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure the root logger: console output, plus a daily rotating file if given."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_file),
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
            delay=True,
        )
        file_handler.suffix = "%Y%m%d"
        handlers.append(file_handler)

    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT, handlers=handlers)
