# planner_logging.py
# Console + rotating file logging for the planner app and its search.

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from planner_config import get_settings

FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> None:
    # Console + rotating file (<log_dir>/planner.log); a no-op once the root logger has handlers.
    settings = get_settings()
    level = (level or settings.log_level).upper()
    log_dir = Path(log_dir or settings.log_dir)

    root = logging.getLogger()
    root.setLevel(level)

    # Prevent duplicate handlers
    if root.handlers:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=FMT, datefmt=DATEFMT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)

    file_handler = RotatingFileHandler(
        log_dir / "planner.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(file_handler)
