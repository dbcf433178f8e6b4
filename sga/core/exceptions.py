"""
Custom exceptions for the SGA optimizer.

This module defines a hierarchy of exceptions that provide specific error handling
for configuration, validation and the evolutionary loop.
"""

from typing import Optional, Any

class SGAException(Exception):
    """Base exception for errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(SGAException):
    """Raised when there are issues with configuration settings."""
    pass


class ValidationError(SGAException):
    """Raised when data or parameters fail validation."""
    pass


class OptimizationError(SGAException):
    """Raised when there are issues during genetic optimization."""
    pass


class EvaluationError(OptimizationError):
    """Raised when the objective function produces a non-finite fitness."""
    pass
