"""Structured logging for submission observability."""

import logging
import json
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


class JsonFormatter(logging.Formatter):
    """Custom formatter that outputs logs as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string with timestamp, level, component, event, and optional data
        """
        log_data = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "component": record.name,
            "event": record.getMessage(),
        }

        # Include extra data if provided
        if hasattr(record, 'data'):
            log_data['data'] = record.data

        if record.exc_info:
            log_data['error'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logger(name: str = "feedback_portal", log_dir: Optional[str] = None) -> logging.Logger:
    """
    Set up structured logger for submission debugging.

    Creates the log directory if it doesn't exist.
    Configures rotating file handler (10MB files, keep 5).

    Args:
        name: Logger name (default: feedback_portal)
        log_dir: Directory for log files (default: LOG_DIR env var or "logs")

    Returns:
        Configured logger instance
    """
    log_path = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    handler = RotatingFileHandler(
        log_path / "feedback_portal.log",
        maxBytes=10_000_000,  # 10MB
        backupCount=5
    )
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    return logger
