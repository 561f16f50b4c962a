"""
Structured logging configuration for keyed_reducers.

Provides JSON-formatted logs with instance_id support for correlating
records from one combined reducer across many dispatches. Shape and
unexpected-key warnings are routed into the log via captureWarnings.

Environment Variables:
    KEYED_REDUCERS_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    KEYED_REDUCERS_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from keyed_reducers.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, instance_id="root-1f3a")
    logger.info("Composed reducer")
"""

import logging
import os
import sys
from typing import Optional, TextIO

from pythonjsonlogger.json import JsonFormatter


def setup_logging(stream: Optional[TextIO] = None) -> None:
    """
    Configure root logger with structured logging.

    Reads configuration from environment variables:
    - KEYED_REDUCERS_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - KEYED_REDUCERS_LOG_FORMAT: json, text (default: json)

    Args:
        stream: Output stream (default: sys.stdout)
    """
    log_level = os.getenv("KEYED_REDUCERS_LOG_LEVEL", "INFO").upper()
    log_format = os.getenv("KEYED_REDUCERS_LOG_FORMAT", "json").lower()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    level = level_map.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    # Filters on handlers also see records propagated from child loggers
    handler.addFilter(InstanceIDFilter())

    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(instance_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [instance_id=%(instance_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # ShapeWarning / UnexpectedKeyWarning land in the "py.warnings" logger
    logging.captureWarnings(True)


def get_logger(name: str, instance_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional instance_id for correlation.

    Args:
        name: Logger name (typically __name__)
        instance_id: Combined reducer instance ID

    Returns:
        LoggerAdapter with instance_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"instance_id": instance_id or "N/A"})


class InstanceIDFilter(logging.Filter):
    """
    Logging filter that adds instance_id to all log records.

    Ensures all logs have an instance_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "instance_id"):
            record.instance_id = "N/A"  # type: ignore
        return True
