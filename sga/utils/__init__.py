"""
Utility functions for the SGA optimizer.

This module contains validators, decorators, and helper functions.
"""

from .validators import (
    validate_probability,
    validate_search_config,
    validate_domain_config,
    validate_chromosome
)
from .decorators import log_execution_time
from .helpers import ensure_directory, format_bits, parse_bits, format_fitness

__all__ = [
    "validate_probability",
    "validate_search_config",
    "validate_domain_config",
    "validate_chromosome",
    "log_execution_time",
    "ensure_directory",
    "format_bits",
    "parse_bits",
    "format_fitness"
]
