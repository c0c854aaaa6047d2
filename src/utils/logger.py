"""Logging configuration and utilities."""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional
from config.settings import settings


class TickContextFilter(logging.Filter):
    """Filter to add the current dashboard tick to log records."""

    def __init__(self):
        super().__init__()
        self.tick = None

    def set_tick(self, tick: Optional[int]):
        """Set the tick (sequence number) stamped on subsequent records."""
        self.tick = tick

    def filter(self, record):
        """Add tick context to the log record."""
        record.tick = self.tick if self.tick is not None else '-'
        return True


# Shared by every handler so one update reaches all loggers
_tick_filter = TickContextFilter()
_console_suppressed = False


def get_logger(name: str) -> logging.Logger:
    """Get configured logger instance with tick context."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        # Configure logger
        level = getattr(logging, settings.get('logging.level', 'INFO').upper(), logging.INFO)
        logger.setLevel(level)
        logger.propagate = False

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - [tick %(tick)s] - %(levelname)s - %(message)s'
        )

        # Console handler (skipped once the terminal UI owns the screen)
        if not _console_suppressed:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            console_handler.addFilter(_tick_filter)
            logger.addHandler(console_handler)

        # File handler
        log_file = settings.get('logging.file', 'logs/net_dashboard.log')
        log_dir = os.path.dirname(log_file)
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=settings.get('logging.max_bytes', 10485760),
            backupCount=settings.get('logging.backup_count', 5)
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_tick_filter)
        logger.addHandler(file_handler)

    return logger


def set_log_tick(tick: Optional[int]) -> None:
    """Update the tick shown in every log record."""
    _tick_filter.set_tick(tick)


def suppress_console_logging() -> None:
    """Drop console handlers so log output does not corrupt the terminal UI.

    File logging is unaffected. Loggers created afterwards get no console handler.
    """
    global _console_suppressed
    _console_suppressed = True

    for logger in list(logging.root.manager.loggerDict.values()):
        if not isinstance(logger, logging.Logger):
            continue
        for handler in list(logger.handlers):
            # RotatingFileHandler is a StreamHandler subclass too
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                logger.removeHandler(handler)
