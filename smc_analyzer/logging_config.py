"""
Centralized logging configuration for the SMC analyzer.

Provides consistent logging across all modules with support for:
- Console output with colored level names
- Optional rotating log file
- Structured logging (JSON format option)
- Environment-based configuration (LOG_LEVEL, LOG_FILE, LOG_JSON, LOG_CONSOLE)
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "smc_analyzer"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        result = super().format(record)

        # Reset levelname for other handlers sharing the record
        record.levelname = levelname

        return result


def setup_logging(
    name: Optional[str] = PACKAGE_LOGGER,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    console: bool = True,
    json_format: bool = False,
    rotation: bool = True,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure logging for the analyzer.

    Args:
        name: Logger name (defaults to the package logger)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (None = no file logging)
        console: Enable console logging (stderr)
        json_format: Use JSON format for structured logging
        rotation: Enable log file rotation
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(level="DEBUG", log_file="logs/smc.log")
        >>> logger.info("Analyzer started")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")
    if log_file is None:
        log_file = os.getenv("LOG_FILE")

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    if json_format:
        log_format = (
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "function": "%(funcName)s", '
            '"line": %(lineno)d, "message": "%(message)s"}'
        )
        date_format = "%Y-%m-%dT%H:%M:%S"
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        date_format = "%Y-%m-%d %H:%M:%S"

    if console:
        # stderr keeps stdout clean for report / JSON output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        if json_format:
            console_handler.setFormatter(logging.Formatter(log_format, date_format))
        else:
            console_handler.setFormatter(ColoredFormatter(log_format, date_format))
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        if rotation:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        else:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")

        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the package logger, configuring defaults once.

    Example:
        >>> logger = get_logger(__name__)
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        setup_logging()

    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exc: Exception,
    message: str = "An exception occurred",
    level: int = logging.ERROR,
) -> None:
    """
    Log an exception with full traceback.

    Example:
        >>> try:
        ...     detector.detect(candles)
        ... except ValueError as e:
        ...     log_exception(logger, e, "Detection failed")
    """
    logger.log(level, f"{message}: {exc}", exc_info=True)


def configure_default_logging() -> logging.Logger:
    """
    Configure the package logger from environment variables.

    - LOG_LEVEL: Logging level (default: WARNING)
    - LOG_FILE: Log file path (default: none)
    - LOG_JSON: Use JSON format (default: false)
    - LOG_CONSOLE: Enable console output (default: true)
    """
    json_format = os.getenv("LOG_JSON", "false").lower() == "true"
    console = os.getenv("LOG_CONSOLE", "true").lower() == "true"

    logger = setup_logging(json_format=json_format, console=console)
    logger.debug(f"Logging initialized (level={logging.getLevelName(logger.level)})")
    return logger
