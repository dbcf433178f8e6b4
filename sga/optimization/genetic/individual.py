"""
Individuals, the problem they are decoded against, and the population.

An :class:`Individual` is only ever created by :meth:`Problem.evaluate_chromosome`,
which decodes, maps and evaluates the chromosome in one go. Changing a
chromosome therefore always means building a new Individual, and a fitness
can never be stale with respect to its chromosome.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from sga.core.exceptions import ValidationError
from sga.utils.helpers import format_bits
from .decoder import DomainMapping, decode
from .direction import Direction, is_better
from .objective import FitnessEvaluator


@dataclass(eq=False)
class Individual:
    """A decoded and evaluated candidate solution."""

    chromosome: np.ndarray
    x_raw: int
    y_raw: int
    x: float
    y: float
    fitness: float

    def copy(self) -> "Individual":
        """Value snapshot that shares no memory with this individual."""
        return replace(self, chromosome=self.chromosome.copy())

    @property
    def bits(self) -> str:
        return format_bits(self.chromosome)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chromosome": self.bits,
            "x_raw": self.x_raw,
            "y_raw": self.y_raw,
            "x": self.x,
            "y": self.y,
            "fitness": self.fitness,
        }

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Individual):
            return False
        return (
            np.array_equal(self.chromosome, other.chromosome)
            and self.fitness == other.fitness
            and (self.x, self.y) == (other.x, other.y)
        )

    def __repr__(self) -> str:
        return f"Individual({self.bits}, x={self.x:.4f}, y={self.y:.4f}, fitness={self.fitness:.4f})"


class Problem:
    """
    Chromosome layout, domain mapping and objective for one search.

    The decoder and the domain mapping are fixed by ``chromosome_length`` and
    the two :class:`DomainMapping` instances; the objective is pluggable
    through the :class:`FitnessEvaluator`.
    """

    def __init__(
        self,
        chromosome_length: int = 32,
        x_domain: Optional[DomainMapping] = None,
        y_domain: Optional[DomainMapping] = None,
        evaluator: Optional[FitnessEvaluator] = None
    ):
        if chromosome_length < 2 or chromosome_length % 2:
            raise ValidationError(
                f"Chromosome length must be even and at least 2, got {chromosome_length}"
            )
        self.chromosome_length = chromosome_length
        self.x_domain = x_domain or DomainMapping()
        self.y_domain = y_domain or DomainMapping()
        self.evaluator = evaluator or FitnessEvaluator()

    @property
    def half_length(self) -> int:
        return self.chromosome_length // 2

    def to_real(self, x_raw: int, y_raw: int) -> Tuple[float, float]:
        """Map a raw integer pair into the real-valued domain."""
        return (
            self.x_domain.to_real(x_raw, self.half_length),
            self.y_domain.to_real(y_raw, self.half_length),
        )

    def decode_real(self, chromosome: Sequence[int]) -> Tuple[float, float]:
        """Decode a chromosome straight to its ``(x, y)`` phenotype."""
        return self.to_real(*decode(chromosome))

    def evaluate_chromosome(self, chromosome: Sequence[int]) -> Individual:
        """
        Build a fully synchronized individual from a chromosome.

        Raises:
            ValidationError: If the chromosome has the wrong length
            EvaluationError: If the objective returns a non-finite fitness
        """
        bits = np.array(chromosome, dtype=np.uint8)
        if bits.shape != (self.chromosome_length,):
            raise ValidationError(
                f"Expected a chromosome of {self.chromosome_length} bits, got shape {bits.shape}"
            )
        x_raw, y_raw = decode(bits)
        x, y = self.to_real(x_raw, y_raw)
        fitness = self.evaluator.evaluate_raw(x_raw, y_raw, x, y)
        return Individual(chromosome=bits, x_raw=x_raw, y_raw=y_raw, x=x, y=y, fitness=fitness)

    def random_chromosome(self, rng: np.random.Generator) -> np.ndarray:
        """Fair coin toss per bit, one draw per bit."""
        return (rng.random(self.chromosome_length) < 0.5).astype(np.uint8)

    def random_individual(self, rng: np.random.Generator) -> Individual:
        return self.evaluate_chromosome(self.random_chromosome(rng))


class Population:
    """Ordered, fixed-size collection of individuals."""

    def __init__(self, individuals: Sequence[Individual]):
        self._individuals: List[Individual] = list(individuals)

    @classmethod
    def random(cls, size: int, problem: Problem, rng: np.random.Generator) -> "Population":
        """Create a population of ``size`` random individuals."""
        return cls([problem.random_individual(rng) for _ in range(size)])

    def __len__(self) -> int:
        return len(self._individuals)

    def __getitem__(self, index: int) -> Individual:
        return self._individuals[index]

    def __setitem__(self, index: int, individual: Individual) -> None:
        self._individuals[index] = individual

    def __iter__(self) -> Iterator[Individual]:
        return iter(self._individuals)

    def best_index(self, direction: Direction) -> int:
        """Index of the first individual with the direction-optimal fitness."""
        best = 0
        for i in range(1, len(self._individuals)):
            if is_better(self._individuals[i].fitness, self._individuals[best].fitness, direction):
                best = i
        return best

    def worst_index(self, direction: Direction) -> int:
        """Index of the first individual that every other one beats or ties."""
        worst = 0
        for i in range(1, len(self._individuals)):
            if is_better(self._individuals[worst].fitness, self._individuals[i].fitness, direction):
                worst = i
        return worst

    def best(self, direction: Direction) -> Individual:
        """Snapshot of the best individual."""
        return self._individuals[self.best_index(direction)].copy()

    def fitnesses(self) -> np.ndarray:
        return np.array([ind.fitness for ind in self._individuals], dtype=float)

    def chromosomes(self) -> List[np.ndarray]:
        return [ind.chromosome.copy() for ind in self._individuals]

    def diversity(self) -> float:
        """Mean pairwise Hamming distance between chromosomes."""
        if len(self._individuals) < 2:
            return 0.0
        matrix = np.stack([ind.chromosome for ind in self._individuals]).astype(np.int64)
        size = len(matrix)
        # A column with c ones differs in exactly c * (size - c) pairs
        ones = matrix.sum(axis=0)
        total = int((ones * (size - ones)).sum())
        return total / (size * (size - 1) / 2)
