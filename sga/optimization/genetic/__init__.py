"""
Simple genetic algorithm over binary-encoded two-variable problems.
"""

from .direction import Direction, is_better
from .decoder import DomainMapping, decode, encode, encode_pair
from .objective import FitnessEvaluator, OBJECTIVES, get_objective, sin_bowl
from .individual import Individual, Problem, Population
from .operators import (
    tournament_select,
    crossover,
    crossover_at,
    mutate,
    apply_elitism,
    apply_disaster
)
from .reporting import (
    GenerationReport,
    Reporter,
    LoggingReporter,
    TableReporter,
    HistoryReporter,
    CompositeReporter
)
from .genetic_search import GeneticSearch, GenerationResult, SearchState

__all__ = [
    "Direction",
    "is_better",
    "DomainMapping",
    "decode",
    "encode",
    "encode_pair",
    "FitnessEvaluator",
    "OBJECTIVES",
    "get_objective",
    "sin_bowl",
    "Individual",
    "Problem",
    "Population",
    "tournament_select",
    "crossover",
    "crossover_at",
    "mutate",
    "apply_elitism",
    "apply_disaster",
    "GenerationReport",
    "Reporter",
    "LoggingReporter",
    "TableReporter",
    "HistoryReporter",
    "CompositeReporter",
    "GeneticSearch",
    "GenerationResult",
    "SearchState"
]
