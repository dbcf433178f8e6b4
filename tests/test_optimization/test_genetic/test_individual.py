"""
Tests for individuals, the problem definition and the population.
"""

import pytest
import numpy as np

from sga.core.exceptions import ValidationError
from sga.optimization.genetic import (
    Direction, DomainMapping, FitnessEvaluator, Individual, Population, Problem, encode_pair
)
from sga.optimization.genetic.objective import sphere

pytestmark = [
    pytest.mark.unit,
    pytest.mark.optimization,
    pytest.mark.genetic
]


class TestProblem:
    """Test the Problem class."""

    def test_defaults(self, problem):
        """Test the reference layout."""
        assert problem.chromosome_length == 32
        assert problem.half_length == 16
        assert problem.x_domain == DomainMapping(-60.0, 60.0)
        assert problem.evaluator.name == "sin_bowl"

    @pytest.mark.parametrize("length", [0, 1, 7, 33])
    def test_invalid_length(self, length):
        """Test odd or tiny chromosome lengths are rejected."""
        with pytest.raises(ValidationError):
            Problem(chromosome_length=length)

    def test_evaluate_chromosome(self, problem):
        """Test that decoding, mapping and evaluation agree."""
        chromosome = encode_pair(0, 65535, 32)
        individual = problem.evaluate_chromosome(chromosome)

        assert (individual.x_raw, individual.y_raw) == (0, 65535)
        assert (individual.x, individual.y) == (-60.0, 60.0)
        assert individual.fitness == problem.evaluator.evaluate(-60.0, 60.0)

    def test_evaluate_copies_input(self, problem):
        """Test that the individual does not alias the caller's list."""
        bits = [0] * 32
        individual = problem.evaluate_chromosome(bits)
        bits[0] = 1
        assert individual.chromosome[0] == 0

    def test_evaluate_wrong_length(self, problem):
        """Test a chromosome of the wrong length is rejected."""
        with pytest.raises(ValidationError, match="Expected a chromosome of 32 bits"):
            problem.evaluate_chromosome([0] * 30)

    def test_custom_domain_and_objective(self):
        """Test a problem over another domain and objective."""
        problem = Problem(
            chromosome_length=4,
            x_domain=DomainMapping(0.0, 3.0),
            y_domain=DomainMapping(-3.0, 0.0),
            evaluator=FitnessEvaluator(sphere)
        )
        individual = problem.evaluate_chromosome([1, 1, 0, 1])
        assert (individual.x, individual.y) == (3.0, -2.0)
        assert individual.fitness == 13.0

    def test_random_chromosome(self, problem, rng):
        """Test random chromosomes are binary and of the right length."""
        chromosome = problem.random_chromosome(rng)
        assert chromosome.shape == (32,)
        assert chromosome.dtype == np.uint8
        assert set(np.unique(chromosome)) <= {0, 1}

    def test_random_chromosome_is_reproducible(self, problem):
        """Test the same seed produces the same chromosome."""
        first = problem.random_chromosome(np.random.default_rng(5))
        second = problem.random_chromosome(np.random.default_rng(5))
        assert np.array_equal(first, second)


class TestIndividual:
    """Test the Individual class."""

    def test_copy_is_independent(self, problem):
        """Test that a snapshot shares no memory with the original."""
        individual = problem.evaluate_chromosome([1] * 32)
        snapshot = individual.copy()

        individual.chromosome[0] = 0
        assert snapshot.chromosome[0] == 1
        assert snapshot.fitness == individual.fitness

    def test_bits_and_dict(self, problem):
        """Test the string and dictionary views."""
        individual = problem.evaluate_chromosome([1, 0] * 16)
        assert individual.bits == "10" * 16
        data = individual.to_dict()
        assert data["chromosome"] == "10" * 16
        assert data["x_raw"] == individual.x_raw
        assert data["fitness"] == individual.fitness

    def test_equality(self, problem):
        """Test individuals compare by value."""
        first = problem.evaluate_chromosome([0, 1] * 16)
        second = problem.evaluate_chromosome([0, 1] * 16)
        third = problem.evaluate_chromosome([1, 0] * 16)

        assert first == second
        assert first != third
        assert first != "0101"

    def test_repr(self, individual_factory):
        """Test the display form."""
        text = repr(individual_factory(1.5, length=4))
        assert text.startswith("Individual(0000")
        assert "fitness=1.5000" in text


class TestPopulation:
    """Test the Population class."""

    def test_random_population(self, problem, rng):
        """Test creating a random population."""
        population = Population.random(6, problem, rng)
        assert len(population) == 6
        for individual in population:
            x, y = problem.decode_real(individual.chromosome)
            assert (individual.x, individual.y) == (x, y)

    def test_best_index_minimize(self, population_factory):
        """Test the best index when minimizing."""
        population = population_factory([3.0, -1.0, 2.0, -1.0])
        assert population.best_index(Direction.MINIMIZE) == 1

    def test_best_index_maximize(self, population_factory):
        """Test the best index when maximizing (first maximum wins)."""
        population = population_factory([3.0, -1.0, 3.0, 0.0])
        assert population.best_index(Direction.MAXIMIZE) == 0

    def test_worst_index(self, population_factory):
        """Test the worst index in both directions (first worst wins)."""
        population = population_factory([3.0, -1.0, 3.0, -1.0])
        assert population.worst_index(Direction.MINIMIZE) == 0
        assert population.worst_index(Direction.MAXIMIZE) == 1

    def test_best_is_snapshot(self, population_factory):
        """Test that best() returns a copy."""
        population = population_factory([1.0, 0.0])
        best = population.best(Direction.MINIMIZE)
        assert best == population[1]
        assert best is not population[1]

    def test_setitem_and_fitnesses(self, population_factory, individual_factory):
        """Test replacing a slot."""
        population = population_factory([1.0, 2.0])
        population[1] = individual_factory(5.0)
        assert population.fitnesses().tolist() == [1.0, 5.0]

    def test_chromosomes_are_copies(self, population_factory):
        """Test chromosomes() does not expose live arrays."""
        population = population_factory([1.0, 2.0])
        chromosomes = population.chromosomes()
        chromosomes[0][0] = 1
        assert population[0].chromosome[0] == 0

    def test_diversity(self, individual_factory):
        """Test the mean pairwise Hamming distance."""
        population = Population([
            individual_factory(0.0, [0, 0]),
            individual_factory(0.0, [1, 1]),
            individual_factory(0.0, [0, 1]),
        ])
        # Distances 2, 1 and 1 over three pairs
        assert population.diversity() == pytest.approx(4 / 3)

    def test_diversity_of_clones(self, population_factory):
        """Test identical chromosomes have zero diversity."""
        assert population_factory([1.0, 2.0, 3.0]).diversity() == 0.0
        assert population_factory([1.0]).diversity() == 0.0
