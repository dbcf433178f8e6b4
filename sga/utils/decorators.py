"""
Decorators for the SGA optimizer.
"""

import time
import functools
import logging
from typing import Callable, Optional

from ..core.logging import get_logger


def log_execution_time(logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
    """
    Decorator to log function execution time.

    Args:
        logger: Logger instance for timing messages
        level: Level of the completion message

    Returns:
        Decorated function
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger_instance = logger or get_logger(func.__module__)

            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                execution_time = time.perf_counter() - start_time
                logger_instance.error(
                    f"{func.__name__} failed after {execution_time:.4f}s: {str(e)}"
                )
                raise
            execution_time = time.perf_counter() - start_time
            logger_instance.log(level, f"{func.__name__} completed in {execution_time:.4f}s")
            return result

        return wrapper

    return decorator
