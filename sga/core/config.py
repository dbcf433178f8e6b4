"""
Configuration management for the SGA optimizer.

This module provides file-based configuration for the search, the problem
domain and logging. A few settings can be overridden from environment
variables (or a ``.env`` file) so runs can be re-seeded without editing files.
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict
from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .logging import get_logger
from ..utils.validators import validate_search_config, validate_domain_config


@dataclass
class SearchConfig:
    """Configuration for the evolutionary loop."""

    # Population parameters
    population_size: int = 20
    chromosome_length: int = 32
    max_generations: int = 10000

    # Genetic operators
    mutation_rate: float = 0.08
    tournament_size: int = 3
    elitism: bool = True
    disaster_period: int = 8

    # Objective direction: "minimize" or "maximize"
    direction: str = "minimize"

    # Reporting
    report_interval: int = 1

    # Random seed; None seeds from the wall clock
    seed: Optional[int] = None

    # Early stopping, disabled while patience is None
    patience: Optional[int] = None
    min_improvement: float = 0.0


@dataclass
class DomainConfig:
    """Configuration for the real-valued search domain and objective."""
    x_low: float = -60.0
    x_high: float = 60.0
    y_low: float = -60.0
    y_high: float = 60.0
    objective: str = "sin_bowl"
    cache_fitness: bool = False


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    log_file: str = "logs/sga.log"
    enable_console: bool = True
    enable_file: bool = False


class Config:
    """
    Main configuration class for the SGA optimizer.

    Values come from the dataclass defaults, then an optional JSON file, then
    the ``SGA_SEED``, ``SGA_LOG_LEVEL`` and ``SGA_DIRECTION`` environment
    variables. The result is validated before it is handed out.
    """

    def __init__(self, config_file: Optional[Path] = None, env_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to JSON configuration file
            env_file: Path to .env file with overrides
        """
        self.logger = get_logger(__name__)

        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        self.search = SearchConfig()
        self.domain = DomainConfig()
        self.logging = LoggingConfig()

        if config_file is not None:
            config_file = Path(config_file)
            if not config_file.exists():
                raise ConfigurationError(f"Config file not found: {config_file}")
            self._load_from_file(config_file)

        self._load_env_overrides()

        self.validate()

        self.logger.debug("Configuration loaded successfully")

    def _load_from_file(self, config_file: Path):
        """Load configuration from JSON file."""
        try:
            with open(config_file, 'r') as f:
                config_data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to load config file {config_file}: {str(e)}")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a JSON object")

        unknown = []
        for section_name, section_data in config_data.items():
            section = getattr(self, section_name, None)
            if section is None or not isinstance(section_data, dict):
                unknown.append(section_name)
                continue
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    unknown.append(f"{section_name}.{key}")

        if unknown:
            self.logger.warning(f"Ignoring unknown configuration keys: {unknown}")

        self.logger.info(f"Loaded configuration from {config_file}")

    def _load_env_overrides(self):
        """Apply overrides from environment variables."""
        seed = os.getenv("SGA_SEED")
        if seed:
            try:
                self.search.seed = int(seed)
            except ValueError:
                raise ConfigurationError(f"SGA_SEED must be an integer, got {seed!r}")

        if os.getenv("SGA_LOG_LEVEL"):
            self.logging.level = os.getenv("SGA_LOG_LEVEL").upper()

        if os.getenv("SGA_DIRECTION"):
            self.search.direction = os.getenv("SGA_DIRECTION")

    def validate(self):
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: Listing every invalid setting in ``details``
        """
        errors = []

        errors.extend(validate_search_config(self.search, raise_on_error=False))
        errors.extend(validate_domain_config(self.domain, raise_on_error=False))

        if self.logging.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.logging.level}")

        if errors:
            raise ConfigurationError("Configuration validation failed", details=errors)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "search": asdict(self.search),
            "domain": asdict(self.domain),
            "logging": asdict(self.logging),
        }

    def save(self, config_file: Path):
        """Save configuration to JSON file."""
        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, 'w') as f:
                json.dump(self.to_dict(), f, indent=2)
            self.logger.info(f"Configuration saved to {config_file}")
        except OSError as e:
            raise ConfigurationError(f"Failed to save config file {config_file}: {str(e)}")

    def __repr__(self) -> str:
        return (
            f"Config(objective={self.domain.objective}, direction={self.search.direction}, "
            f"population={self.search.population_size}, generations={self.search.max_generations})"
        )


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Optional[Config]):
    """
    Set the global configuration instance.

    Args:
        config: Configuration instance to set, or None to reset it
    """
    global _config
    _config = config
