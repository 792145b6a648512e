"""Logging configuration for the catalog scraper with log rotation."""

import logging
import os
import shutil
import sys
from logging.handlers import RotatingFileHandler
from config import settings

# Maximum log file size: 5 MB
MAX_LOG_SIZE = 5 * 1024 * 1024
BACKUP_COUNT = 5


class SafeRotatingFileHandler(RotatingFileHandler):
    """
    RotatingFileHandler that tolerates a log file locked by another process.

    When the live log cannot be renamed (PermissionError on Windows), it is
    copied to the backup and truncated in place instead.
    """

    def rotate(self, source, dest):
        """Move `source` to `dest`, copying and truncating if the move fails."""
        try:
            super().rotate(source, dest)
        except OSError:
            if source != self.baseFilename:
                raise
            shutil.copy2(source, dest)
            with open(source, 'w', encoding=self.encoding):
                pass


def _get_rotating_handler(log_file: str, level: int = logging.INFO,
                          formatter: logging.Formatter = None) -> SafeRotatingFileHandler:
    """
    Create a rotating file handler with 5 MB max size.

    Args:
        log_file: Path to log file
        level: Logging level
        formatter: Log formatter (optional)

    Returns:
        SafeRotatingFileHandler instance
    """
    handler = SafeRotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding='utf-8'
    )
    handler.setLevel(level)
    if formatter is None:
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    return handler


def _configure_logger(name: str, *handlers) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.propagate = False
    for handler in handlers:
        logger.addHandler(handler)
    return logger


def setup_logging():
    """Configure logging for extraction, proxy fetches, the web API and failures."""
    os.makedirs(settings.LOGS_DIR, exist_ok=True)

    scraper_handler = _get_rotating_handler(os.path.join(settings.LOGS_DIR, 'scraper.log'))
    fetch_handler = _get_rotating_handler(os.path.join(settings.LOGS_DIR, 'fetch.log'))
    web_handler = _get_rotating_handler(os.path.join(settings.LOGS_DIR, 'web.log'))

    # Errors from every component also land in errors.log
    error_handler = _get_rotating_handler(
        os.path.join(settings.LOGS_DIR, 'errors.log'),
        level=logging.ERROR,
        formatter=logging.Formatter('%(asctime)s - %(levelname)s - %(name)s - %(message)s')
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Named loggers do not propagate to root to avoid duplicate lines
    _configure_logger('scraper', scraper_handler, error_handler)
    _configure_logger('fetch', fetch_handler, error_handler)
    _configure_logger('web', web_handler, error_handler)

    error_logger = logging.getLogger('error')
    error_logger.propagate = False
    error_logger.addHandler(error_handler)
    error_logger.setLevel(logging.ERROR)

    # Only warnings and errors from the Flask dev server
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    def exception_handler(exc_type, exc_value, exc_traceback):
        """Log all unhandled exceptions."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        error_logger.error(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = exception_handler

    return root_logger


def get_logger(name):
    """Get a logger instance by name."""
    return logging.getLogger(name)
