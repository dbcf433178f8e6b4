"""
Optimization module for the SGA optimizer.

This module provides the binary genetic algorithm and its operators.
"""

from .genetic.individual import Individual, Problem, Population
from .genetic.genetic_search import GeneticSearch
from .genetic.objective import FitnessEvaluator

__all__ = [
    "Individual",
    "Problem",
    "Population",
    "GeneticSearch",
    "FitnessEvaluator"
]
