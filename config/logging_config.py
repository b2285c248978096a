"""
Logging for textbatch.

Pipeline modules call get_logger(__name__). Every logger handed out here
writes to the same two handlers: stderr for warnings (the CLI's progress
bar owns stdout) and a size-rotated file that keeps the DEBUG trail of
admissions, cache hits and degraded groups.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import List, Set
from .constants import (
    LOG_LEVEL, LOG_FORMAT, LOG_FILE,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)

_handlers: List[logging.Handler] = []
_configured: Set[str] = set()


def _shared_handlers() -> List[logging.Handler]:
    """Console and rotating-file handlers, created on first use"""
    if _handlers:
        return _handlers

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(formatter)

    log_path = Path(LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    trail = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    trail.setLevel(logging.DEBUG)
    trail.setFormatter(formatter)

    _handlers.extend([console, trail])
    return _handlers


def setup_logger(name: str = None) -> logging.Logger:
    """
    Attach the shared handlers to a named logger.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
        logger.debug(f"Admitted {task_id}")

    Args:
        name: Logger name, 'textbatch' when omitted.
    """
    logger = logging.getLogger(name or 'textbatch')
    if logger.name in _configured:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL))
    for handler in _shared_handlers():
        logger.addHandler(handler)
    # 'textbatch.x' would otherwise reach the same handlers again through 'textbatch'
    logger.propagate = False

    _configured.add(logger.name)
    return logger


def get_logger(name: str = None) -> logging.Logger:
    return setup_logger(name)


def set_level(level: str) -> None:
    """Change the level of every logger configured here (CLI --log-level)."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    for name in _configured:
        logging.getLogger(name).setLevel(numeric)


logger = setup_logger('textbatch')
