# logging_config.py
import logging
import logging.handlers
import os
from pathlib import Path

from config_sys import LOG_DIR, LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers and the level they are held at
LIBRARY_LEVELS = {
    "uvicorn.access": logging.INFO,
    "uvicorn.error": logging.INFO,
    "fastapi": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}


def _log_dir() -> Path:
    if LOG_DIR:
        return Path(LOG_DIR)
    if os.path.exists("/app"):
        return Path("/app/logs")
    return Path(__file__).resolve().parent / "logs"


def setup_logging():
    """Rotating file + console logging on the root logger; returns the log file path"""
    log_dir = _log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "bonus-service.log"

    level = getattr(logging, LOG_LEVEL, logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    handlers = [
        logging.handlers.TimedRotatingFileHandler(
            filename=str(log_file), when='midnight', backupCount=30, encoding='utf-8'
        ),
        logging.StreamHandler(),
    ]

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name, lib_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(lib_level)

    logging.info(f"Logging initialized. Log file: {log_file}")
    return str(log_file)
