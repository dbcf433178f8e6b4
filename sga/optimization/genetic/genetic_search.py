"""
Generation driver for the simple genetic algorithm.

This module runs the evolutionary loop: capture the best individual, apply
the periodic disaster, select, cross over, mutate, re-evaluate, apply
elitism and report, once per generation, for a fixed generation budget.
"""

import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from sga.core.config import Config, SearchConfig
from sga.core.exceptions import ConfigurationError, OptimizationError
from sga.core.logging import get_logger, generate_correlation_id, set_correlation_id
from sga.utils.decorators import log_execution_time
from sga.utils.validators import validate_search_config, validate_chromosome
from .decoder import DomainMapping
from .direction import Direction, is_better
from .individual import Individual, Population, Problem
from .objective import FitnessEvaluator, get_objective
from .operators import (
    apply_disaster,
    apply_elitism,
    crossover_population,
    mutate_and_promote,
    tournament_select
)
from .reporting import GenerationReport, Reporter

logger = get_logger(__name__)


class SearchState(Enum):
    """Lifecycle of a search."""

    INITIALIZING = "initializing"
    RUNNING = "running"
    FINALIZING = "finalizing"
    FINISHED = "finished"


@dataclass
class GenerationResult:
    """Summary of a single generation."""

    generation: int
    best_fitness: float
    avg_fitness: float
    worst_fitness: float
    best_overall_fitness: float
    population_diversity: float
    disaster_slots: List[int] = field(default_factory=list)
    elite_applied: bool = False


class GeneticSearch:
    """
    Fixed-population genetic algorithm over a two-variable objective.

    The search owns its population and its random generator. All randomness
    is drawn from that single generator, so a fixed seed fixes the run.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        problem: Optional[Problem] = None,
        reporter: Optional[Reporter] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize genetic search.

        Args:
            config: Search configuration
            problem: Chromosome layout, domain and objective
            reporter: Collaborator receiving generation and final reports
            seed: Random seed, overriding ``config.seed``; when both are None
                the wall clock is used

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = config or SearchConfig()
        validate_search_config(self.config)

        self.problem = problem or Problem(chromosome_length=self.config.chromosome_length)
        if self.problem.chromosome_length != self.config.chromosome_length:
            raise ConfigurationError(
                "Problem and search configuration disagree on chromosome length",
                details={
                    "problem": self.problem.chromosome_length,
                    "config": self.config.chromosome_length
                }
            )

        self.direction = Direction.from_value(self.config.direction)
        self.reporter = reporter

        if seed is None:
            seed = self.config.seed
        if seed is None:
            seed = time.time_ns() % (2 ** 32)
        self.seed = seed
        self.rng = np.random.default_rng(seed)

        self.run_id = generate_correlation_id()
        self.state = SearchState.INITIALIZING
        self.population: Optional[Population] = None
        self.generation: int = 0
        self.selected: List[int] = []

        self.best_of_generation: Optional[Individual] = None
        self.best_overall: Optional[Individual] = None
        self.initial_best: Optional[Individual] = None

        self.generation_history: List[GenerationResult] = []
        self.best_fitness_history: List[float] = []
        self.stopped_early = False

    @classmethod
    def from_config(
        cls,
        config: Config,
        reporter: Optional[Reporter] = None,
        seed: Optional[int] = None
    ) -> "GeneticSearch":
        """Build a search, including its problem, from a full :class:`Config`."""
        domain = config.domain
        problem = Problem(
            chromosome_length=config.search.chromosome_length,
            x_domain=DomainMapping(domain.x_low, domain.x_high),
            y_domain=DomainMapping(domain.y_low, domain.y_high),
            evaluator=FitnessEvaluator(
                get_objective(domain.objective),
                cache_results=domain.cache_fitness
            )
        )
        return cls(config=config.search, problem=problem, reporter=reporter, seed=seed)

    def initialize_population(self, initial_chromosomes: Optional[Sequence[Sequence[int]]] = None) -> None:
        """
        Create generation 0 and report it.

        Args:
            initial_chromosomes: Optional starting chromosomes, one per slot;
                random chromosomes are used otherwise

        Raises:
            ValidationError: If the starting chromosomes are malformed
        """
        size = self.config.population_size
        logger.info(f"Initializing population of size {size} (seed {self.seed})")

        if initial_chromosomes is not None:
            if len(initial_chromosomes) != size:
                raise ConfigurationError(
                    f"Initial population size {len(initial_chromosomes)} "
                    f"doesn't match config size {size}"
                )
            for chromosome in initial_chromosomes:
                validate_chromosome(chromosome, self.problem.chromosome_length)
            self.population = Population(
                [self.problem.evaluate_chromosome(c) for c in initial_chromosomes]
            )
        else:
            self.population = Population.random(size, self.problem, self.rng)

        self.generation = 0
        self.selected = []
        self.initial_best = self.population.best(self.direction)
        self.state = SearchState.RUNNING

        if self.reporter is not None:
            self.reporter.report_generation(
                GenerationReport.from_population(
                    0, self.population, self.problem,
                    best_overall=self.initial_best
                )
            )

    def capture_best(self) -> Individual:
        """
        Snapshot the best individual of the current population.

        The snapshot replaces the best individual of the run only if it is
        strictly better.
        """
        best = self.population.best(self.direction)
        self.best_of_generation = best
        if self.best_overall is None or is_better(best.fitness, self.best_overall.fitness, self.direction):
            self.best_overall = best.copy()
            logger.debug(
                f"New best fitness {best.fitness:.4f} at generation {self.generation}"
            )
        return best

    def step(self) -> GenerationResult:
        """
        Run one generation.

        Raises:
            OptimizationError: If the population has not been initialized or
                the search has already finished
        """
        if self.state is not SearchState.RUNNING:
            raise OptimizationError(
                f"Cannot run a generation while the search is {self.state.value}"
            )

        self.generation += 1
        generation = self.generation
        elite = self.capture_best()

        disaster_slots: List[int] = []
        if self.config.disaster_period and generation % self.config.disaster_period == 0:
            disaster_slots = apply_disaster(self.population, self.problem, self.rng)

        self.selected = tournament_select(
            self.population, self.rng, self.direction, self.config.tournament_size
        )
        buffer = crossover_population(self.population, self.selected, self.rng)
        mutate_and_promote(self.population, buffer, self.config.mutation_rate, self.problem, self.rng)

        elite_applied = False
        if self.config.elitism:
            elite_applied = apply_elitism(self.population, elite, self.direction)

        result = self._create_generation_result(disaster_slots, elite_applied)
        self.generation_history.append(result)
        self.best_fitness_history.append(self.best_overall.fitness)

        if self.reporter is not None and generation % self.config.report_interval == 0:
            self.reporter.report_generation(
                GenerationReport.from_population(
                    generation,
                    self.population,
                    self.problem,
                    self.selected,
                    best_of_generation=elite,
                    best_overall=self.best_overall.copy(),
                    disaster_slots=disaster_slots,
                    elite_applied=elite_applied
                )
            )

        return result

    @log_execution_time()
    def run(self, initial_chromosomes: Optional[Sequence[Sequence[int]]] = None) -> Individual:
        """
        Run the genetic algorithm to completion.

        Args:
            initial_chromosomes: Optional starting chromosomes

        Returns:
            Snapshot of the best individual observed during the run
        """
        set_correlation_id(self.run_id)
        try:
            logger.info(
                f"Starting genetic search: {self.config.max_generations} generations, "
                f"{self.direction} over {self.problem.evaluator.name}"
            )
            if self.state is SearchState.INITIALIZING:
                self.initialize_population(initial_chromosomes)

            while self.generation < self.config.max_generations:
                self.step()
                if self._should_stop_early():
                    self.stopped_early = True
                    logger.info(f"Early stopping at generation {self.generation}")
                    break

            return self._finalize_search()
        finally:
            set_correlation_id(None)

    def _create_generation_result(self, disaster_slots: List[int], elite_applied: bool) -> GenerationResult:
        """Create result summary for current generation."""
        fitnesses = self.population.fitnesses()
        best = self.population[self.population.best_index(self.direction)]
        worst = self.population[self.population.worst_index(self.direction)]

        return GenerationResult(
            generation=self.generation,
            best_fitness=best.fitness,
            avg_fitness=float(np.mean(fitnesses)),
            worst_fitness=worst.fitness,
            best_overall_fitness=self.best_overall.fitness,
            population_diversity=self.population.diversity(),
            disaster_slots=disaster_slots,
            elite_applied=elite_applied
        )

    def _should_stop_early(self) -> bool:
        """Check if the best fitness stalled for ``patience`` generations."""
        patience = self.config.patience
        if patience is None or len(self.best_fitness_history) <= patience:
            return False

        latest = self.best_fitness_history[-1]
        earlier = self.best_fitness_history[-1 - patience]
        improved = (
            is_better(latest, earlier, self.direction)
            and abs(latest - earlier) > self.config.min_improvement
        )
        return not improved

    def _finalize_search(self) -> Individual:
        """Account for the last generation and emit the final report."""
        self.state = SearchState.FINALIZING
        self.capture_best()

        logger.info("=== Genetic Search Completed ===")
        logger.info(f"Best fitness: {self.best_overall.fitness:.4f}")

        if self.reporter is not None:
            self.reporter.report_final(self.best_overall.copy(), self.get_search_summary())
        self.state = SearchState.FINISHED
        return self.best_overall.copy()

    def history_frame(self) -> pd.DataFrame:
        """Generation history as a DataFrame indexed by generation."""
        frame = pd.DataFrame([asdict(result) for result in self.generation_history])
        if not frame.empty:
            frame = frame.set_index("generation")
        return frame

    def get_search_summary(self) -> Dict[str, Any]:
        """Get a summary of the search results."""
        return {
            "run_id": self.run_id,
            "seed": self.seed,
            "direction": str(self.direction),
            "objective": self.problem.evaluator.name,
            "best_fitness": self.best_overall.fitness if self.best_overall else None,
            "best_individual": self.best_overall.to_dict() if self.best_overall else None,
            "initial_best_fitness": self.initial_best.fitness if self.initial_best else None,
            "total_generations": self.generation,
            "stopped_early": self.stopped_early,
            "population_size": self.config.population_size,
            "final_population_diversity": self.population.diversity() if self.population else 0.0,
            "cache": self.problem.evaluator.get_cache_stats(),
            "config": asdict(self.config)
        }
