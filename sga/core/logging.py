"""
Centralized logging for the SGA optimizer.

Console output uses a plain text formatter; the optional rotating log file
receives one JSON object per record so runs can be inspected afterwards.
Every record emitted while a search is running carries the run id of that
search as its correlation id.
"""

import functools
import logging
import logging.handlers
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
import json


class CorrelationFilter(logging.Filter):
    """Adds the current run id to log records."""

    def __init__(self):
        super().__init__()
        self.correlation_id = None

    def filter(self, record):
        if self.correlation_id:
            record.correlation_id = self.correlation_id
        return True

    def set_correlation_id(self, correlation_id: Optional[str]):
        """Set the correlation ID for the current context."""
        self.correlation_id = correlation_id


class StructuredFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, 'correlation_id'):
            log_entry["correlation_id"] = record.correlation_id

        # Generation reports attach their payload here
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    enable_console: bool = True,
    enable_file: bool = True,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> logging.Logger:
    """
    Set up centralized logging for the SGA optimizer.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (defaults to logs/sga.log)
        enable_console: Whether to log to console
        enable_file: Whether to log to file
        max_file_size: Maximum size of log file before rotation
        backup_count: Number of backup log files to keep

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()
    for filter_obj in list(root_logger.filters):
        if isinstance(filter_obj, CorrelationFilter):
            root_logger.removeFilter(filter_obj)

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Shared with the handlers: records from child loggers skip root filters
    correlation_filter = CorrelationFilter()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        console_handler.addFilter(correlation_filter)
        root_logger.addHandler(console_handler)

    if enable_file:
        log_file = Path(log_file) if log_file is not None else Path("logs") / "sga.log"
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count
        )
        file_handler.setFormatter(StructuredFormatter())
        file_handler.addFilter(correlation_filter)
        root_logger.addHandler(file_handler)

    root_logger.addFilter(correlation_filter)

    logger = get_logger(__name__)
    logger.debug("SGA logging system initialized", extra={
        "extra_fields": {
            "log_level": level,
            "log_file": str(log_file) if enable_file else None,
            "enable_console": enable_console,
            "enable_file": enable_file
        }
    })

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name (usually ``__name__``)."""
    return logging.getLogger(name)


def set_correlation_id(correlation_id: Optional[str]):
    """
    Set the correlation ID for the current logging context.

    Args:
        correlation_id: Run id to stamp on records, or None to clear it
    """
    root_logger = logging.getLogger()
    for filter_obj in root_logger.filters:
        if isinstance(filter_obj, CorrelationFilter):
            filter_obj.set_correlation_id(correlation_id)
            break


def generate_correlation_id() -> str:
    """Generate a new run id."""
    return str(uuid.uuid4())


def log_with_correlation(func):
    """
    Decorator that runs ``func`` under a fresh correlation ID.

    Start, completion and failure are logged at debug/error level with the
    id attached, and the id is cleared again afterwards.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        correlation_id = generate_correlation_id()
        set_correlation_id(correlation_id)

        logger = get_logger(func.__module__)
        logger.debug(f"Starting {func.__name__}", extra={
            "extra_fields": {
                "correlation_id": correlation_id,
                "function": func.__name__,
            }
        })

        try:
            result = func(*args, **kwargs)
            logger.debug(f"Completed {func.__name__}", extra={
                "extra_fields": {
                    "correlation_id": correlation_id,
                    "function": func.__name__,
                    "result_type": type(result).__name__
                }
            })
            return result
        except Exception as e:
            logger.error(f"Error in {func.__name__}: {str(e)}", extra={
                "extra_fields": {
                    "correlation_id": correlation_id,
                    "function": func.__name__,
                    "error_type": type(e).__name__
                }
            }, exc_info=True)
            raise
        finally:
            set_correlation_id(None)

    return wrapper
