"""
End-to-end tests for the genetic search.
"""

import io
import pytest

from sga.core.config import SearchConfig
from sga.optimization.genetic import (
    CompositeReporter,
    DomainMapping,
    FitnessEvaluator,
    GeneticSearch,
    HistoryReporter,
    Problem,
    TableReporter
)
from sga.optimization.genetic.objective import himmelblau

pytestmark = [
    pytest.mark.integration,
    pytest.mark.optimization,
    pytest.mark.genetic
]


class TestReferenceRun:
    """The classic configuration on the sin-bowl surface."""

    @pytest.mark.slow
    def test_full_reference_run(self):
        """Test 10000 generations of 20 individuals improve on generation 0."""
        search = GeneticSearch(SearchConfig(seed=20240101))
        best = search.run()

        assert search.generation == 10000
        assert best.fitness <= search.initial_best.fitness
        assert -60.0 <= best.x <= 60.0
        assert -60.0 <= best.y <= 60.0
        # The surface reaches well below -10000 inside the domain
        assert best.fitness < -10000.0

    def test_short_run_with_reporters(self):
        """Test a short run with the table and history reporters together."""
        stream = io.StringIO()
        history = HistoryReporter()
        reporter = CompositeReporter([TableReporter(stream=stream), history])

        search = GeneticSearch(SearchConfig(max_generations=16, seed=5), reporter=reporter)
        best = search.run()

        text = stream.getvalue()
        assert text.count("GENERATION: ") == 17
        assert "Best result over all generations:" in text
        assert best.bits in text

        frame = history.to_dataframe()
        assert len(frame) == 17 * 20
        # Two disasters, ten slots each
        assert frame["disaster"].sum() == 20
        assert history.best == best


class TestOtherProblems:
    """Runs on the additional objectives."""

    def test_himmelblau_converges(self):
        """Test the search gets close to a Himmelblau minimum."""
        problem = Problem(
            x_domain=DomainMapping(-5.0, 5.0),
            y_domain=DomainMapping(-5.0, 5.0),
            evaluator=FitnessEvaluator(himmelblau, cache_results=True)
        )
        search = GeneticSearch(SearchConfig(max_generations=300, seed=11), problem=problem)
        best = search.run()

        assert best.fitness < 1.0
        assert problem.evaluator.get_cache_stats()["cache_hits"] > 0
