"""
Pytest configuration and common fixtures for SGA testing.

This file contains shared fixtures and configuration that can be used
across all test modules.
"""

import os
import json
import logging
import pytest
import tempfile
import shutil
from pathlib import Path
import numpy as np

# Add the project root to Python path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from sga.core import SearchConfig
from sga.core.config import set_config
from sga.core.logging import set_correlation_id
from sga.optimization.genetic import Individual, Population, Problem

SGA_ENV_VARS = ("SGA_SEED", "SGA_LOG_LEVEL", "SGA_DIRECTION")


@pytest.fixture(autouse=True)
def isolated_environment():
    """Keep environment overrides, the global config and log handlers per test."""
    saved = {name: os.environ.pop(name) for name in SGA_ENV_VARS if name in os.environ}
    root_logger = logging.getLogger()
    root_level = root_logger.level
    yield
    for name in SGA_ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)
    set_config(None)
    set_correlation_id(None)
    root_logger.setLevel(root_level)
    for filter_obj in list(root_logger.filters):
        root_logger.removeFilter(filter_obj)
    for handler in list(root_logger.handlers):
        if not type(handler).__module__.startswith("_pytest"):
            root_logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "search": {
            "population_size": 10,
            "chromosome_length": 16,
            "max_generations": 50,
            "mutation_rate": 0.05,
            "direction": "maximize",
            "seed": 7
        },
        "domain": {
            "x_low": -5.0,
            "x_high": 5.0,
            "objective": "sphere"
        },
        "logging": {
            "level": "DEBUG"
        }
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Create a temporary config file for testing."""
    config_path = temp_dir / "test_config.json"
    with open(config_path, 'w') as f:
        json.dump(sample_config_data, f, indent=2)
    return config_path


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(12345)


@pytest.fixture
def problem():
    """Reference problem: 32-bit chromosomes, [-60, 60] squared, sin-bowl."""
    return Problem(chromosome_length=32)


@pytest.fixture
def small_search_config():
    """Short search used by driver tests."""
    return SearchConfig(
        population_size=10,
        chromosome_length=32,
        max_generations=40,
        mutation_rate=0.08,
        report_interval=1,
        seed=2024
    )


def make_individual(fitness, chromosome=None, length=8):
    """Individual with a given fitness, bypassing decoding."""
    bits = np.zeros(length, dtype=np.uint8) if chromosome is None else np.array(chromosome, dtype=np.uint8)
    return Individual(chromosome=bits, x_raw=0, y_raw=0, x=0.0, y=0.0, fitness=float(fitness))


@pytest.fixture
def individual_factory():
    return make_individual


@pytest.fixture
def population_factory():
    """Build a population from a list of fitness values."""
    def factory(fitnesses, length=8):
        return Population([make_individual(f, length=length) for f in fitnesses])
    return factory


# Test markers for organizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    for marker, description in [
        ("unit", "mark test as a unit test"),
        ("integration", "mark test as an integration test"),
        ("slow", "mark test as slow running"),
        ("core", "mark test as testing core functionality"),
        ("config", "mark test as testing configuration"),
        ("logging", "mark test as testing logging"),
        ("exceptions", "mark test as testing exceptions"),
        ("utils", "mark test as testing utilities"),
        ("optimization", "mark test as testing optimization"),
        ("genetic", "mark test as testing the genetic algorithm"),
        ("cli", "mark test as testing the command line interface"),
    ]:
        config.addinivalue_line("markers", f"{marker}: {description}")
