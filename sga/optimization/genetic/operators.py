"""
Genetic operators: tournament selection, one-point crossover, bitwise
mutation, elitism and the periodic disaster.

Every operator draws from the ``numpy.random.Generator`` it is handed, so
one seeded generator owned by the search driver fixes the whole run.
"""

from functools import cmp_to_key
from typing import Callable, List, Sequence, Tuple

import numpy as np

from sga.core.logging import get_logger
from .direction import Direction, compare, is_better
from .individual import Individual, Population, Problem

logger = get_logger(__name__)


def rank_candidates(
    candidates: Sequence[int],
    fitness_of: Callable[[int], float],
    direction: Direction
) -> List[int]:
    """
    Order candidate indices from best to worst.

    The sort is stable, so candidates with equal fitness keep the order in
    which they were drawn.
    """
    return sorted(
        candidates,
        key=cmp_to_key(lambda a, b: compare(fitness_of(a), fitness_of(b), direction))
    )


def top_k(
    candidates: Sequence[int],
    fitness_of: Callable[[int], float],
    direction: Direction,
    k: int
) -> List[int]:
    """The ``k`` best candidates, best first."""
    return rank_candidates(candidates, fitness_of, direction)[:k]


def tournament_select(
    population: Population,
    rng: np.random.Generator,
    direction: Direction,
    tournament_size: int = 3
) -> List[int]:
    """
    Fill a selection buffer of ``len(population)`` parent indices.

    For each pair slot, ``tournament_size`` indices are drawn uniformly with
    replacement and the best two become that pair's parents.

    Args:
        population: Population to select from
        rng: Random generator
        direction: Optimization direction
        tournament_size: Candidates drawn per pair (at least 2)

    Returns:
        Selected indices, consumed two at a time by crossover
    """
    size = len(population)

    def fitness_of(index: int) -> float:
        return population[index].fitness

    selected: List[int] = []
    for _ in range(size // 2):
        candidates = [int(i) for i in rng.integers(0, size, size=tournament_size)]
        selected.extend(top_k(candidates, fitness_of, direction, 2))
    return selected


def crossover_at(
    parent1: np.ndarray,
    parent2: np.ndarray,
    site: int
) -> Tuple[np.ndarray, np.ndarray]:
    """
    One-point crossover at a fixed site.

    Child 1 takes bits ``[0, site]`` (inclusive) from ``parent1`` and the rest
    from ``parent2``; child 2 gets the complement. At ``site == 0`` both
    children are plain copies of their first parent.
    """
    # TODO: site 0 behaving as "no crossover" may be an off-by-one in the
    # classic SGA this follows; changing it shifts the exploration bias.
    if site == 0:
        return parent1.copy(), parent2.copy()
    cut = site + 1
    child1 = np.concatenate([parent1[:cut], parent2[cut:]])
    child2 = np.concatenate([parent2[:cut], parent1[cut:]])
    return child1, child2


def crossover(
    parent1: np.ndarray,
    parent2: np.ndarray,
    rng: np.random.Generator
) -> Tuple[np.ndarray, np.ndarray]:
    """One-point crossover at a site drawn uniformly from ``[0, L)``."""
    site = int(rng.integers(0, len(parent1)))
    return crossover_at(parent1, parent2, site)


def crossover_population(
    population: Population,
    selected: Sequence[int],
    rng: np.random.Generator
) -> List[np.ndarray]:
    """
    Cross consecutive pairs of the selection buffer.

    Parents are read from ``population`` and never modified; the children are
    returned as a new generation buffer in slot order.
    """
    buffer: List[np.ndarray] = []
    for i in range(0, len(selected), 2):
        child1, child2 = crossover(
            population[selected[i]].chromosome,
            population[selected[i + 1]].chromosome,
            rng
        )
        buffer.extend((child1, child2))
    return buffer


def mutate(chromosome: np.ndarray, rate: float, rng: np.random.Generator) -> np.ndarray:
    """Flip each bit independently with probability ``rate``."""
    flips = rng.random(len(chromosome)) < rate
    return np.bitwise_xor(chromosome, flips.astype(np.uint8))


def mutate_and_promote(
    population: Population,
    buffer: Sequence[np.ndarray],
    rate: float,
    problem: Problem,
    rng: np.random.Generator
) -> None:
    """
    Mutate the generation buffer into the live population.

    Each slot is replaced by an individual decoded and evaluated from its
    mutated chromosome, so the population is synchronized on return.
    """
    for i, chromosome in enumerate(buffer):
        population[i] = problem.evaluate_chromosome(mutate(chromosome, rate, rng))


def apply_elitism(population: Population, elite: Individual, direction: Direction) -> bool:
    """
    Put ``elite`` into slot 0 if it beats the current occupant.

    Returns:
        True if slot 0 was overwritten
    """
    if is_better(elite.fitness, population[0].fitness, direction):
        population[0] = elite.copy()
        return True
    return False


def apply_disaster(
    population: Population,
    problem: Problem,
    rng: np.random.Generator
) -> List[int]:
    """
    Re-randomize every second individual starting at a random offset.

    The offset is 0 or 1 with equal probability, so exactly half of an
    even-sized population is replaced and the other half is untouched.

    Returns:
        Indices of the re-randomized slots
    """
    offset = int(rng.integers(0, 2))
    reset = list(range(offset, len(population), 2))
    for i in reset:
        population[i] = problem.random_individual(rng)
    logger.debug(f"Disaster re-randomized {len(reset)} individuals from offset {offset}")
    return reset
