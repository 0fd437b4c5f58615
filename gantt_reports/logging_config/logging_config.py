import logging
import logging.handlers
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES = 10_000_000
LOG_BACKUPS = 5


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(app_name: str = "gantt-reports", level: int = logging.INFO) -> None:
    """Configure application logging

    Every report run logs to the console and to ``<LOG_DIR>/<app_name>.log``;
    errors are also kept in ``<app_name>-error.log`` so failed runs are easy
    to find.

    Args:
        app_name: Name to use for log files
        level: Level for the console and the main log file

    """
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    os.makedirs(log_dir, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in (
        console_handler,
        _rotating_handler(log_dir / f"{app_name}.log", level, formatter),
        _rotating_handler(log_dir / f"{app_name}-error.log", logging.ERROR, formatter),
    ):
        root_logger.addHandler(handler)
