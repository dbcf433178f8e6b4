"""
SGA - Simple Genetic Algorithm

A fixed-population genetic algorithm that minimizes (or maximizes) a
two-variable objective over a bounded domain using binary-encoded
chromosomes, tournament selection, one-point crossover, bitwise mutation,
elitism and a periodic disaster.
"""

__version__ = "0.1.0"

from .core.config import Config
from .core.logging import setup_logging
from .optimization.genetic import GeneticSearch, Problem, Individual, Direction

__all__ = [
    "Config",
    "setup_logging",
    "GeneticSearch",
    "Problem",
    "Individual",
    "Direction"
]
