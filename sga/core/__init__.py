"""
Core functionality for the SGA optimizer.

This module contains configuration management, logging setup, and custom exceptions.
"""

from .config import Config, SearchConfig, DomainConfig, LoggingConfig
from .exceptions import SGAException, ConfigurationError, ValidationError, OptimizationError, EvaluationError
from .logging import setup_logging, get_logger

__all__ = [
    "Config",
    "SearchConfig",
    "DomainConfig",
    "LoggingConfig",
    "SGAException",
    "ConfigurationError",
    "ValidationError",
    "OptimizationError",
    "EvaluationError",
    "setup_logging",
    "get_logger"
]
