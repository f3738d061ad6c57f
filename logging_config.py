"""
Logging setup shared by the engine modules.

Format: [TIMESTAMP] [LEVEL] [MODULE:FUNCTION:LINE] MESSAGE
Level comes from the LOG_LEVEL environment variable unless given explicitly.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class StructuredFormatter(logging.Formatter):
    """Single-line formatter with call-site location."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        location = f"{record.module}:{record.funcName}:{record.lineno}"
        msg = f"[{timestamp}] [{record.levelname:8s}] [{location}] {record.getMessage()}"
        if record.exc_info:
            msg += f"\n{self.formatException(record.exc_info)}"
        return msg


class Timer:
    """Context manager logging how long a block took."""

    def __init__(self, logger: logging.Logger, operation: str, threshold_ms: float = 100):
        self.logger = logger
        self.operation = operation
        self.threshold_ms = threshold_ms
        self.start_time = None
        self.elapsed_ms = 0.0

    def __enter__(self):
        self.start_time = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        if self.elapsed_ms > self.threshold_ms:
            self.logger.warning(f"SLOW: {self.operation} took {self.elapsed_ms:.1f}ms")
        else:
            self.logger.debug(f"{self.operation} took {self.elapsed_ms:.1f}ms")


def setup_logger(
    name: str,
    level: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Return a logger writing structured lines to stdout (and optionally a file).

    Args:
        name: Logger name (usually __name__)
        level: DEBUG, INFO, WARNING, ERROR. Defaults to $LOG_LEVEL or INFO
        log_file: Optional file path for logs
    """
    logger = logging.getLogger(name)

    # Already configured
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv('LOG_LEVEL', 'INFO')
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def timed(logger: logging.Logger, operation: str, threshold_ms: float = 100) -> Timer:
    """
    Usage:
        with timed(logger, "sweep 6x8"):
            matrix = build()
    """
    return Timer(logger, operation, threshold_ms)
