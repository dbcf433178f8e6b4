"""
Validation utilities for the SGA optimizer.

This module validates search and domain settings before a run starts. Each
validator collects every problem it finds, so a bad configuration is
reported in one go instead of one error at a time.
"""

from typing import Any, List, Optional, Sequence

import numpy as np

from ..core.exceptions import ValidationError, ConfigurationError
from ..core.logging import get_logger


def validate_probability(value: Any, name: str) -> Optional[str]:
    """Return an error message if ``value`` is not a probability."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"{name} must be a number, got {value!r}"
    if not 0.0 <= value <= 1.0:
        return f"{name} must be between 0 and 1, got {value}"
    return None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_search_config(config: Any, raise_on_error: bool = True) -> List[str]:
    """
    Validate the evolutionary loop settings.

    Args:
        config: Object with the attributes of ``SearchConfig``
        raise_on_error: Raise instead of returning the error list

    Returns:
        List of error messages (empty if valid)

    Raises:
        ConfigurationError: If validation fails and ``raise_on_error`` is set
    """
    from ..optimization.genetic.direction import Direction

    logger = get_logger(__name__)
    errors = []

    if not _is_int(config.population_size) or config.population_size < 2 or config.population_size % 2:
        errors.append(f"Population size must be an even integer >= 2, got {config.population_size!r}")

    if not _is_int(config.chromosome_length) or config.chromosome_length < 2 or config.chromosome_length % 2:
        errors.append(f"Chromosome length must be an even integer >= 2, got {config.chromosome_length!r}")

    if not _is_int(config.max_generations) or config.max_generations < 1:
        errors.append(f"Max generations must be a positive integer, got {config.max_generations!r}")

    message = validate_probability(config.mutation_rate, "Mutation rate")
    if message:
        errors.append(message)

    if not _is_int(config.tournament_size) or config.tournament_size < 2:
        errors.append(f"Tournament size must be an integer >= 2, got {config.tournament_size!r}")

    if not _is_int(config.disaster_period) or config.disaster_period < 0:
        errors.append(f"Disaster period must be a non-negative integer, got {config.disaster_period!r}")

    if not _is_int(config.report_interval) or config.report_interval < 1:
        errors.append(f"Report interval must be a positive integer, got {config.report_interval!r}")

    try:
        Direction.from_value(config.direction)
    except ValueError as e:
        errors.append(str(e))

    if config.seed is not None and not _is_int(config.seed):
        errors.append(f"Seed must be an integer or None, got {config.seed!r}")

    if config.patience is not None and (not _is_int(config.patience) or config.patience < 1):
        errors.append(f"Patience must be a positive integer or None, got {config.patience!r}")

    min_improvement = config.min_improvement
    if (isinstance(min_improvement, bool) or not isinstance(min_improvement, (int, float))
            or not np.isfinite(min_improvement) or min_improvement < 0):
        errors.append(f"Min improvement must be a finite number >= 0, got {min_improvement!r}")

    if errors and raise_on_error:
        raise ConfigurationError("Search configuration validation failed", details=errors)

    if not errors:
        logger.debug("Search configuration validation passed")
    return errors


def validate_domain_config(config: Any, raise_on_error: bool = True) -> List[str]:
    """
    Validate the domain bounds and objective name.

    Args:
        config: Object with the attributes of ``DomainConfig``
        raise_on_error: Raise instead of returning the error list

    Returns:
        List of error messages (empty if valid)
    """
    from ..optimization.genetic.objective import OBJECTIVES

    errors = []

    for axis in ("x", "y"):
        low = getattr(config, f"{axis}_low")
        high = getattr(config, f"{axis}_high")
        if not all(isinstance(v, (int, float)) and np.isfinite(v) for v in (low, high)):
            errors.append(f"{axis} bounds must be finite numbers, got [{low!r}, {high!r}]")
        elif low >= high:
            errors.append(f"{axis} lower bound must be below upper bound, got [{low}, {high}]")

    if config.objective not in OBJECTIVES:
        errors.append(f"Unknown objective '{config.objective}', expected one of {sorted(OBJECTIVES)}")

    if errors and raise_on_error:
        raise ConfigurationError("Domain configuration validation failed", details=errors)
    return errors


def validate_chromosome(chromosome: Sequence[int], length: int) -> bool:
    """
    Validate a user-supplied chromosome.

    Raises:
        ValidationError: If it has the wrong length or a non-binary entry
    """
    bits = np.asarray(chromosome)
    if bits.ndim != 1 or len(bits) != length:
        raise ValidationError(f"Chromosome must have {length} bits, got shape {bits.shape}")
    if not np.isin(bits, (0, 1)).all():
        raise ValidationError("Chromosome must only contain 0 and 1")
    return True
